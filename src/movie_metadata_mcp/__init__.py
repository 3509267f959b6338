"""
Movie Metadata MCP Server Package.

An MCP (Model Context Protocol) server exposing movie and TV metadata from
two external providers as tools:

- OMDb (primary): lookup by IMDb ID, enabled by ``OMDB_API_KEY``
- TMDB (secondary): search, details, popular listings and performance
  analysis, enabled by ``TMDB_API_KEY``

Key Components:
- config: Environment-based configuration with pydantic-settings
- providers: httpx clients for OMDb and TMDB
- tools: Argument validation and response shaping per tool
- registry: Ordered tool descriptors and availability filtering
- dispatcher: Name-to-handler routing with error-to-result conversion
- server: FastMCP wiring and the stdio entry point
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
]
