"""Test configuration and fixtures for the Movie Metadata MCP Server.

This conftest.py provides:
1. Isolated configuration - no API keys leak in from the environment or .env
2. One ServerConfig per credential combination (none / OMDb / TMDB / both)
3. A fake provider API served through ``httpx.MockTransport``
4. Sample provider payloads shaped like real OMDb and TMDB responses
"""

import os
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from movie_metadata_mcp.config import ServerConfig, reset_config
from movie_metadata_mcp.dispatcher import ToolDispatcher

OMDB_KEY = "omdb-test-key"
TMDB_KEY = "tmdb-test-key"


def pytest_configure(config):
    config.addinivalue_line("markers", "mcp_protocol: mark test as exercising the MCP protocol surface")


# === Configuration Fixtures ===


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> Generator[None, None, None]:
    """Remove provider keys and MOVIE_METADATA_* settings from the environment."""
    for key in list(os.environ):
        if key.startswith("MOVIE_METADATA_") or key in ("OMDB_API_KEY", "TMDB_API_KEY"):
            monkeypatch.delenv(key, raising=False)

    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_config() -> Callable[..., ServerConfig]:
    """Build a ServerConfig that ignores any .env file on disk."""

    def factory(**overrides: Any) -> ServerConfig:
        return ServerConfig(_env_file=None, **overrides)

    return factory


@pytest.fixture
def no_keys_config(make_config) -> ServerConfig:
    return make_config()


@pytest.fixture
def omdb_only_config(make_config) -> ServerConfig:
    return make_config(omdb_api_key=OMDB_KEY)


@pytest.fixture
def tmdb_only_config(make_config) -> ServerConfig:
    return make_config(tmdb_api_key=TMDB_KEY)


@pytest.fixture
def full_config(make_config) -> ServerConfig:
    return make_config(omdb_api_key=OMDB_KEY, tmdb_api_key=TMDB_KEY)


# === Fake Provider API ===


class FakeProviderAPI:
    """Serves canned OMDb/TMDB responses keyed by URL path and records requests.

    OMDb lives at path ``/``; TMDB paths carry the ``/3`` API version prefix,
    e.g. ``/3/movie/550``. Unrouted paths answer 404.
    """

    def __init__(self):
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, json: Any = None, status_code: int = 200) -> None:
        self.routes[path] = lambda _request: httpx.Response(status_code, json=json)

    def add_handler(self, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"status_message": "The resource could not be found."})
        return route(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_api() -> FakeProviderAPI:
    return FakeProviderAPI()


@pytest.fixture
def dispatcher(full_config, fake_api) -> ToolDispatcher:
    """Dispatcher with both providers configured and the fake API behind it."""
    return ToolDispatcher(full_config, transport=fake_api.transport)


# === Sample Provider Payloads ===


@pytest.fixture
def omdb_movie() -> dict[str, Any]:
    return {
        "Title": "The Shawshank Redemption",
        "Year": "1994",
        "Rated": "R",
        "Runtime": "142 min",
        "Genre": "Drama",
        "Director": "Frank Darabont",
        "Plot": "Over the course of several years, two convicts form a friendship.",
        "Ratings": [
            {"Source": "Internet Movie Database", "Value": "9.3/10"},
            {"Source": "Rotten Tomatoes", "Value": "89%"},
        ],
        "imdbRating": "9.3",
        "imdbID": "tt0111161",
        "Type": "movie",
        "Response": "True",
    }


@pytest.fixture
def tmdb_movie() -> dict[str, Any]:
    return {
        "id": 550,
        "title": "Fight Club",
        "tagline": "Mischief. Mayhem. Soap.",
        "release_date": "1999-10-15",
        "runtime": 139,
        "genres": [{"id": 18, "name": "Drama"}, {"id": 53, "name": "Thriller"}],
        "overview": "A ticking-time-bomb insomniac and a slippery soap salesman...",
        "vote_average": 8.4,
        "vote_count": 26280,
        "budget": 63000000,
        "revenue": 100853753,
        "popularity": 61.416,
        "production_companies": [
            {"id": 508, "name": "Regency Enterprises"},
            {"id": 711, "name": "Fox 2000 Pictures"},
        ],
        "imdb_id": "tt0137523",
        "status": "Released",
    }


def make_movie_results(count: int) -> list[dict[str, Any]]:
    return [
        {
            "id": 1000 + i,
            "title": f"Movie {i}",
            "release_date": f"20{i:02d}-01-01",
            "overview": f"Overview {i}",
            "vote_average": 6.5,
            "popularity": 100.0 - i,
            "original_language": "en",
        }
        for i in range(count)
    ]


def make_tv_results(count: int) -> list[dict[str, Any]]:
    return [
        {
            "id": 2000 + i,
            "name": f"Show {i}",
            "first_air_date": f"20{i:02d}-09-01",
            "overview": f"Overview {i}",
            "vote_average": 7.9,
            "popularity": 50.0 - i,
            "origin_country": ["US"],
        }
        for i in range(count)
    ]


@pytest.fixture
def tmdb_tv_show() -> dict[str, Any]:
    return {
        "id": 1396,
        "name": "Breaking Bad",
        "first_air_date": "2008-01-20",
        "last_air_date": "2013-09-29",
        "number_of_seasons": 5,
        "number_of_episodes": 62,
        "genres": [{"id": 18, "name": "Drama"}, {"id": 80, "name": "Crime"}],
        "overview": "Walter White, a New Mexico chemistry teacher...",
        "vote_average": 8.9,
        "vote_count": 13000,
        "status": "Ended",
        "tagline": "Remember my name",
    }


@pytest.fixture
def tmdb_episode() -> dict[str, Any]:
    return {
        "id": 62085,
        "name": "Ozymandias",
        "episode_number": 14,
        "season_number": 5,
        "air_date": "2013-09-15",
        "overview": "Everyone copes with radically changed circumstances.",
        "vote_average": 9.5,
        "runtime": 48,
        "crew": [],
        "guest_stars": [],
    }
