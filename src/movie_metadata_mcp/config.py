"""Configuration management for the Movie Metadata MCP Server.

All settings are read once from the environment (and an optional ``.env``
file) into a frozen :class:`ServerConfig`. The two provider credentials use
their conventional unprefixed names (``OMDB_API_KEY`` and ``TMDB_API_KEY``);
everything else lives under the ``MOVIE_METADATA_`` prefix.

A missing credential is not an error at startup. It only decides which
tools get advertised, and surfaces as a ``ConfigurationError`` if a tool
that needs it is called anyway.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseSettings):
    """Immutable server configuration.

    Built once at process start and handed explicitly to the dispatcher and
    provider clients, so concurrent tool calls share it without locking.
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIE_METADATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # Lets tests pass omdb_api_key=... while the environment uses OMDB_API_KEY
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="movie-metadata-mcp",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="1.0.0",
        description="Server version for capability negotiation",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    transport: str = Field(
        default="stdio",
        description="Transport mechanism; only stdio is served",
        pattern=r"^stdio$",
    )

    # === Provider Credentials ===

    omdb_api_key: str | None = Field(
        default=None,
        validation_alias="OMDB_API_KEY",
        description="OMDb API key (primary provider)",
        repr=False,
    )

    tmdb_api_key: str | None = Field(
        default=None,
        validation_alias="TMDB_API_KEY",
        description="TMDB API key (secondary provider)",
        repr=False,
    )

    # === Provider Endpoints ===

    omdb_base_url: str = Field(
        default="https://www.omdbapi.com",
        description="OMDb endpoint; all parameters go in the query string",
    )

    tmdb_base_url: str = Field(
        default="https://api.themoviedb.org/3",
        description="TMDB API root; tool endpoints are appended to it",
    )

    http_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for each outbound provider request",
        gt=0,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging for protocol messages",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    enable_tracing: bool = Field(
        default=False,
        description="Trace tool calls with logfire",
    )

    # === Validation Methods ===

    @field_validator("omdb_api_key", "tmdb_api_key")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only keys as unset."""
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("omdb_base_url", "tmdb_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # === Computed Properties ===

    @property
    def omdb_available(self) -> bool:
        """Whether the primary (OMDb) provider has a credential."""
        return self.omdb_api_key is not None

    @property
    def tmdb_available(self) -> bool:
        """Whether the secondary (TMDB) provider has a credential."""
        return self.tmdb_api_key is not None


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Get or create the process-wide configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = ServerConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
