"""
MCP tools for the Movie Metadata Server.

Each tool is a ``ToolHandler`` subclass: it validates its arguments, makes
one provider request, and reshapes the JSON response into a smaller
normalized payload. Tool names, descriptions and schemas live in
``movie_metadata_mcp.registry``.
"""

from .base import ToolHandler
from .movies import (
    AnalyzeMoviePerformance,
    GetMovieByImdb,
    GetMovieDetails,
    GetPopularMovies,
    SearchMovies,
)
from .tv import GetTvEpisodeDetails, GetTvShowDetails, SearchTvShows

__all__ = [
    "AnalyzeMoviePerformance",
    "GetMovieByImdb",
    "GetMovieDetails",
    "GetPopularMovies",
    "GetTvEpisodeDetails",
    "GetTvShowDetails",
    "SearchMovies",
    "SearchTvShows",
    "ToolHandler",
]
