"""TMDB client (secondary provider): search, detail and listing endpoints."""

from typing import Any

from .base import Provider, ProviderClient


class TmdbClient(ProviderClient):
    provider = Provider.TMDB

    async def fetch(self, endpoint: str) -> Any:
        """GET ``endpoint`` relative to the TMDB API root.

        ``endpoint`` already carries its own path segments and query string
        (``/search/movie?query=...``); the API key is appended after it.
        """
        key = self._require_key()
        separator = "&" if "?" in endpoint else "?"
        url = f"{self.config.tmdb_base_url}{endpoint}{separator}api_key={key}"
        return await self._get_json(url, log_target=endpoint)
