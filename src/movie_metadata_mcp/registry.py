"""
Tool registry and availability filter.

The registry is a fixed, ordered tuple of :class:`ToolDescriptor` entries.
Order matters: the OMDb tool comes first, then the TMDB tools, and every
listing preserves it.

Two representations are kept apart on purpose:

- ``ToolDescriptor`` is internal and knows which provider owns the tool
  and which handler implements it
- ``ExposedTool`` is what clients see (name, description, input schema),
  produced by ``ToolDescriptor.expose()``
"""

import copy
from typing import Any

from pydantic import BaseModel, ConfigDict

from .config import ServerConfig
from .providers import Provider
from .tools import (
    AnalyzeMoviePerformance,
    GetMovieByImdb,
    GetMovieDetails,
    GetPopularMovies,
    GetTvEpisodeDetails,
    GetTvShowDetails,
    SearchMovies,
    SearchTvShows,
    ToolHandler,
)


class ExposedTool(BaseModel):
    """Tool metadata as advertised over MCP."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any]


class ToolDescriptor(BaseModel):
    """Registry entry: exposed metadata plus owning provider and handler."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any]
    provider: Provider
    handler: type[ToolHandler]

    def expose(self) -> ExposedTool:
        return ExposedTool(
            name=self.name,
            description=self.description,
            input_schema=copy.deepcopy(self.input_schema),
        )


def _schema(properties: dict[str, dict[str, str]], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


TOOL_REGISTRY: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="get_movie_by_imdb",
        description=(
            "Get movie information using IMDB ID via OMDB API. Provides ratings "
            "from multiple sources and additional metadata."
        ),
        input_schema=_schema(
            {"imdb_id": {"type": "string", "description": "The IMDB ID (e.g., tt0111161)"}},
            ["imdb_id"],
        ),
        provider=Provider.OMDB,
        handler=GetMovieByImdb,
    ),
    ToolDescriptor(
        name="search_movies",
        description=(
            "Search for movies by title using TMDB API. Returns a list of matching "
            "movies with basic information."
        ),
        input_schema=_schema(
            {
                "query": {"type": "string", "description": "The movie title to search for"},
                "year": {"type": "number", "description": "Optional release year to filter results"},
            },
            ["query"],
        ),
        provider=Provider.TMDB,
        handler=SearchMovies,
    ),
    ToolDescriptor(
        name="get_movie_details",
        description=(
            "Get detailed information about a specific movie using TMDB ID. Returns "
            "comprehensive metadata including genres, runtime, budget, revenue, and more."
        ),
        input_schema=_schema(
            {"movie_id": {"type": "number", "description": "The TMDB movie ID"}},
            ["movie_id"],
        ),
        provider=Provider.TMDB,
        handler=GetMovieDetails,
    ),
    ToolDescriptor(
        name="get_popular_movies",
        description=(
            "Get a list of currently popular movies from TMDB. Useful for "
            "discovering trending content."
        ),
        input_schema=_schema(
            {"page": {"type": "number", "description": "Page number for pagination (default: 1)"}},
        ),
        provider=Provider.TMDB,
        handler=GetPopularMovies,
    ),
    ToolDescriptor(
        name="analyze_movie_performance",
        description=(
            "Analyze movie performance metrics including ROI, ratings, and "
            "popularity. Requires TMDB movie ID."
        ),
        input_schema=_schema(
            {"movie_id": {"type": "number", "description": "The TMDB movie ID to analyze"}},
            ["movie_id"],
        ),
        provider=Provider.TMDB,
        handler=AnalyzeMoviePerformance,
    ),
    ToolDescriptor(
        name="search_tv_shows",
        description=(
            "Search for TV shows by name using TMDB API. Returns a list of matching "
            "TV shows with basic information."
        ),
        input_schema=_schema(
            {
                "query": {"type": "string", "description": "The TV show name to search for"},
                "year": {"type": "number", "description": "Optional first air year to filter results"},
            },
            ["query"],
        ),
        provider=Provider.TMDB,
        handler=SearchTvShows,
    ),
    ToolDescriptor(
        name="get_tv_show_details",
        description=(
            "Get detailed information about a specific TV show using TMDB ID. Returns "
            "comprehensive metadata including genres, number of seasons/episodes, and more."
        ),
        input_schema=_schema(
            {"tv_id": {"type": "number", "description": "The TMDB TV show ID"}},
            ["tv_id"],
        ),
        provider=Provider.TMDB,
        handler=GetTvShowDetails,
    ),
    ToolDescriptor(
        name="get_tv_episode_details",
        description=(
            "Get detailed information about a specific TV episode using TMDB TV show "
            "ID, season number, and episode number. Returns episode name, air date, "
            "overview, and more."
        ),
        input_schema=_schema(
            {
                "tv_id": {"type": "number", "description": "The TMDB TV show ID"},
                "season_number": {"type": "number", "description": "The season number"},
                "episode_number": {"type": "number", "description": "The episode number"},
            },
            ["tv_id", "season_number", "episode_number"],
        ),
        provider=Provider.TMDB,
        handler=GetTvEpisodeDetails,
    ),
)


def is_available(descriptor: ToolDescriptor, config: ServerConfig) -> bool:
    """Whether the descriptor's provider has a credential configured."""
    return descriptor.provider.is_available(config)


def get_available_tools(config: ServerConfig) -> list[ExposedTool]:
    """Project the registry onto the tools whose provider is configured.

    Registry order is preserved, so the OMDb tool (when available) is
    always first.
    """
    return [
        descriptor.expose()
        for descriptor in TOOL_REGISTRY
        if is_available(descriptor, config)
    ]
