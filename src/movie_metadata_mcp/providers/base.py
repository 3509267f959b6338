"""Shared plumbing for the provider HTTP clients."""

import enum
import logging
from typing import Any

import httpx

from ..config import ServerConfig
from ..errors import ConfigurationError, ProviderHTTPError

logger = logging.getLogger(__name__)


class Provider(enum.Enum):
    """External metadata services a tool can belong to."""

    OMDB = "OMDB"
    TMDB = "TMDB"

    @property
    def env_var(self) -> str:
        return f"{self.value}_API_KEY"

    @property
    def signup_url(self) -> str:
        if self is Provider.OMDB:
            return "https://www.omdbapi.com/apikey.aspx"
        return "https://www.themoviedb.org/settings/api"

    def api_key(self, config: ServerConfig) -> str | None:
        if self is Provider.OMDB:
            return config.omdb_api_key
        return config.tmdb_api_key

    def is_available(self, config: ServerConfig) -> bool:
        return self.api_key(config) is not None


class ProviderClient:
    """Issues one authenticated GET per call and returns the parsed JSON body.

    A fresh ``httpx.AsyncClient`` is opened and closed for every request, so
    nothing is shared between concurrent tool calls. Tests pass ``transport``
    to swap the network for an ``httpx.MockTransport``.
    """

    provider: Provider

    def __init__(
        self,
        config: ServerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self._transport = transport

    def _require_key(self) -> str:
        key = self.provider.api_key(self.config)
        if key is None:
            raise ConfigurationError(
                f"{self.provider.value} API is not configured. "
                f"Please set the {self.provider.env_var} environment variable. "
                f"Get your free API key at {self.provider.signup_url}"
            )
        return key

    async def _get_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
        *,
        log_target: str,
    ) -> Any:
        """GET ``url`` and decode the body.

        ``log_target`` is what gets logged instead of the real URL, which
        carries the API key.
        """
        logger.debug("%s request: %s", self.provider.value, log_target)
        async with httpx.AsyncClient(
            timeout=self.config.http_timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(url, params=params)
            except httpx.HTTPError as e:
                raise ProviderHTTPError(self.provider.value, None, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(
                "%s responded %s %s for %s",
                self.provider.value,
                response.status_code,
                response.reason_phrase,
                log_target,
            )
            raise ProviderHTTPError(
                self.provider.value, response.status_code, response.reason_phrase
            )

        return response.json()
