"""OMDb client (primary provider): single-record lookup by IMDb ID."""

from collections.abc import Mapping
from typing import Any

from ..errors import NotFoundError
from .base import Provider, ProviderClient


class OmdbClient(ProviderClient):
    provider = Provider.OMDB

    async def fetch(self, params: Mapping[str, str]) -> dict[str, Any]:
        """Query the OMDb endpoint with ``params`` plus the API key."""
        key = self._require_key()
        query = {**params, "apikey": key}
        return await self._get_json(
            self.config.omdb_base_url,
            params=query,
            log_target=f"{self.config.omdb_base_url} {dict(params)}",
        )

    @staticmethod
    def ensure_found(data: Mapping[str, Any]) -> None:
        """Raise NotFoundError when OMDb signals a miss inside a 200 response."""
        if data.get("Response") == "False":
            raise NotFoundError(data.get("Error") or "Movie not found")
