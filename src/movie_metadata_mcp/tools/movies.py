"""
Movie tools: IMDb lookup via OMDb, plus search, details, popular listings
and performance analysis via TMDB.

The ``shape_*`` functions are pure: they take the provider's decoded JSON
and return the normalized payload, so they can be tested without HTTP.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from urllib.parse import quote

from .arguments import (
    ImdbLookupArguments,
    MovieIdArguments,
    PageArguments,
    SearchArguments,
)
from .base import ToolHandler, names_of

logger = logging.getLogger(__name__)

# Search tools return at most this many results from TMDB's first page
SEARCH_RESULT_LIMIT = 10


def encode_query(text: str) -> str:
    """Percent-encode a search term for use inside a query string."""
    return quote(text, safe="!~*'()")


# =============================================================================
# RESPONSE SHAPERS
# =============================================================================


def shape_movie_search(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "total_results": data["total_results"],
        "results": [
            {
                "id": movie["id"],
                "title": movie["title"],
                "release_date": movie.get("release_date"),
                "overview": movie.get("overview"),
                "vote_average": movie.get("vote_average"),
                "popularity": movie.get("popularity"),
            }
            for movie in data["results"][:SEARCH_RESULT_LIMIT]
        ],
    }


def shape_movie_details(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": data["id"],
        "title": data["title"],
        "tagline": data.get("tagline"),
        "release_date": data.get("release_date"),
        "runtime": data.get("runtime"),
        "genres": names_of(data["genres"]),
        "overview": data.get("overview"),
        "vote_average": data.get("vote_average"),
        "vote_count": data.get("vote_count"),
        "budget": data.get("budget"),
        "revenue": data.get("revenue"),
        "production_companies": names_of(data["production_companies"]),
    }


def shape_popular_movies(data: dict[str, Any]) -> dict[str, Any]:
    # TMDB already paginates this listing, so every result is kept
    return {
        "page": data["page"],
        "total_pages": data["total_pages"],
        "results": [
            {
                "id": movie["id"],
                "title": movie["title"],
                "release_date": movie.get("release_date"),
                "vote_average": movie.get("vote_average"),
                "popularity": movie.get("popularity"),
            }
            for movie in data["results"]
        ],
    }


def calculate_roi(budget: float, revenue: float) -> float:
    """Return on investment in percent; 0 when the budget is unknown (0)."""
    if budget > 0:
        return (revenue - budget) / budget * 100
    return 0


def format_percentage(value: float) -> str:
    """Two decimals, halves rounded away from zero."""
    return format(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP), "f")


def classify_roi(roi: float) -> str:
    # roi == 0 covers both true break-even and an unknown (zero) budget
    if roi > 100:
        return "Highly Profitable"
    if roi > 0:
        return "Profitable"
    if roi == 0:
        return "Break Even or Unknown"
    return "Loss"


def classify_rating(vote_average: float) -> str:
    if vote_average >= 8:
        return "Excellent"
    if vote_average >= 7:
        return "Good"
    if vote_average >= 6:
        return "Average"
    return "Below Average"


def shape_performance_analysis(data: dict[str, Any]) -> dict[str, Any]:
    """Derive financial and audience metrics from a TMDB movie record."""
    budget = data["budget"]
    revenue = data["revenue"]
    roi = calculate_roi(budget, revenue)

    return {
        "title": data["title"],
        "financial_performance": {
            "budget": budget,
            "revenue": revenue,
            "profit": revenue - budget,
            "roi_percentage": format_percentage(roi),
            "status": classify_roi(roi),
        },
        "audience_reception": {
            "vote_average": data["vote_average"],
            "vote_count": data.get("vote_count"),
            "rating_category": classify_rating(data["vote_average"]),
        },
        "production_info": {
            "runtime_minutes": data.get("runtime"),
            "genres": names_of(data["genres"]),
            "production_companies": names_of(data["production_companies"]),
        },
    }


# =============================================================================
# TOOL HANDLERS
# =============================================================================


class GetMovieByImdb(ToolHandler):
    arguments_model = ImdbLookupArguments

    async def execute(self, params: ImdbLookupArguments) -> dict[str, Any]:
        data = await self.omdb.fetch({"i": params.imdb_id, "plot": "full"})
        self.omdb.ensure_found(data)
        return data


class SearchMovies(ToolHandler):
    arguments_model = SearchArguments

    async def execute(self, params: SearchArguments) -> dict[str, Any]:
        endpoint = f"/search/movie?query={encode_query(params.query)}"
        if params.year:
            endpoint += f"&year={params.year}"
        data = await self.tmdb.fetch(endpoint)
        logger.debug("Movie search %r matched %s results", params.query, data.get("total_results"))
        return shape_movie_search(data)


class GetMovieDetails(ToolHandler):
    arguments_model = MovieIdArguments

    async def execute(self, params: MovieIdArguments) -> dict[str, Any]:
        data = await self.tmdb.fetch(f"/movie/{params.movie_id}")
        return shape_movie_details(data)


class GetPopularMovies(ToolHandler):
    arguments_model = PageArguments

    async def execute(self, params: PageArguments) -> dict[str, Any]:
        data = await self.tmdb.fetch(f"/movie/popular?page={params.page_or_default}")
        return shape_popular_movies(data)


class AnalyzeMoviePerformance(ToolHandler):
    arguments_model = MovieIdArguments

    async def execute(self, params: MovieIdArguments) -> dict[str, Any]:
        data = await self.tmdb.fetch(f"/movie/{params.movie_id}")
        return shape_performance_analysis(data)
