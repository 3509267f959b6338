"""
Argument models for the movie metadata tools.

Tool arguments arrive as an untyped JSON object. Clients are not trusted to
have validated them against the advertised schema, so every handler runs
its arguments through one of these models before touching a provider.

Numeric parameters are advertised as JSON ``number`` but used as path and
query components, so they are coerced to ``int``: ``550``, ``550.0`` and
``"550"`` are all accepted; ``550.5`` and ``true`` are rejected.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass and would otherwise pass as 0/1
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


WholeNumber = Annotated[int, BeforeValidator(_reject_bool)]
NonEmptyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ToolArguments(BaseModel):
    """Base for all tool argument models; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class ImdbLookupArguments(ToolArguments):
    imdb_id: NonEmptyText


class SearchArguments(ToolArguments):
    query: NonEmptyText
    year: WholeNumber | None = None


class MovieIdArguments(ToolArguments):
    movie_id: WholeNumber


class PageArguments(ToolArguments):
    page: WholeNumber | None = None

    @property
    def page_or_default(self) -> int:
        """Requested page, falling back to 1 when absent or zero."""
        return self.page or 1


class TvShowArguments(ToolArguments):
    tv_id: WholeNumber


class EpisodeArguments(ToolArguments):
    tv_id: WholeNumber
    season_number: WholeNumber
    episode_number: WholeNumber
