"""Movie Metadata MCP Server - server assembly and entry point.

The server speaks MCP over stdio through FastMCP:

- ``tools/list`` advertises only the tools whose provider has an API key,
  in registry order (OMDb first)
- ``tools/call`` routes through :class:`ToolDispatcher`, so every failure
  comes back as an ``isError`` result prefixed with ``"Error: "``

stdout carries protocol frames only. Logging and the startup report go to
stderr.
"""

import logging
import signal
import sys
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any, TextIO

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as FastMCPToolResult
from pydantic import PrivateAttr

from .config import ServerConfig, get_config
from .dispatcher import ToolDispatcher
from .observability import ToolCallTracingMiddleware, configure_tracing
from .providers import Provider
from .registry import TOOL_REGISTRY, ToolDescriptor, get_available_tools

logger = logging.getLogger(__name__)

SEPARATOR = "─" * 50


# =============================================================================
# LOGGING
# =============================================================================


def configure_logging(config: ServerConfig) -> None:
    """Send all log output to stderr so stdout stays clean for stdio."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled - verbose protocol logging active")
    else:
        for noisy in ("fastmcp", "httpx", "httpcore"):
            logging.getLogger(noisy).setLevel(logging.WARNING)


# =============================================================================
# STARTUP REPORT
# =============================================================================


def report_startup(config: ServerConfig, stream: TextIO | None = None) -> None:
    """Write provider status and the advertised tool list to stderr."""
    out = stream if stream is not None else sys.stderr

    def emit(line: str = "") -> None:
        print(line, file=out)

    emit(f"Movie Metadata MCP Server running on {config.transport}")
    emit(SEPARATOR)

    emit("Provider Status:")
    for provider in Provider:
        if provider.is_available(config):
            emit(f"  {provider.value}: ✓ Configured")
        else:
            emit(f"  {provider.value}: ✗ Not configured (set {provider.env_var})")

    if not any(provider.is_available(config) for provider in Provider):
        emit()
        emit("⚠ WARNING: No API providers configured!")
        emit("  Please set at least one API key:")
        for provider in Provider:
            emit(f"  - {provider.env_var}: {provider.signup_url}")

    available = get_available_tools(config)
    emit()
    emit(f"Available Tools: {len(available)}")
    for tool in available:
        emit(f"  - {tool.name}")
    emit(SEPARATOR)
    out.flush()


# =============================================================================
# FASTMCP INTEGRATION
# =============================================================================


class RegistryTool(Tool):
    """FastMCP tool backed by a registry descriptor and the dispatcher.

    The advertised schema is the descriptor's hand-written JSON schema;
    argument validation happens in the handler, not in FastMCP.
    """

    _dispatcher: ToolDispatcher = PrivateAttr()

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: ToolDispatcher) -> "RegistryTool":
        exposed = descriptor.expose()
        tool = cls(
            name=exposed.name,
            description=exposed.description,
            parameters=exposed.input_schema,
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: dict[str, Any]) -> FastMCPToolResult:
        result = await self._dispatcher.call_tool(self.name, arguments)
        if result.is_error:
            # FastMCP reports ToolError text verbatim with isError set
            raise ToolError(result.text)
        return FastMCPToolResult(content=result.content)


class ToolAvailabilityMiddleware(Middleware):
    """Hide tools whose provider is unconfigured; answer unknown names.

    Every registry tool stays registered with FastMCP, so a hidden tool can
    still be called by name and reports its missing key itself.
    """

    def __init__(self, config: ServerConfig, dispatcher: ToolDispatcher):
        self.config = config
        self.dispatcher = dispatcher

    async def on_list_tools(self, context: MiddlewareContext, call_next) -> Sequence[Tool]:
        tools = {tool.name: tool for tool in await call_next(context)}
        return [
            tools[exposed.name]
            for exposed in get_available_tools(self.config)
            if exposed.name in tools
        ]

    async def on_call_tool(self, context: MiddlewareContext, call_next) -> Any:
        name = context.message.name
        if not self.dispatcher.has_tool(name):
            result = await self.dispatcher.call_tool(name, context.message.arguments)
            raise ToolError(result.text)
        return await call_next(context)


def create_server(
    config: ServerConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    """Build the FastMCP server for ``config``.

    ``transport`` replaces the network for provider requests (tests).
    """
    dispatcher = ToolDispatcher(config, transport=transport)

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        # Entered once the transport streams are open
        report_startup(config)
        yield {}
        logger.info("MCP Server shutting down")

    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Movie and TV metadata lookups. Use get_movie_by_imdb for IMDb IDs "
            "(OMDb), and the search/details tools for TMDB IDs. Only tools whose "
            "provider API key is configured are listed."
        ),
        lifespan=lifespan,
        # Arguments are checked by each handler's pydantic model
        strict_input_validation=False,
    )

    mcp.add_middleware(ToolAvailabilityMiddleware(config, dispatcher))
    if config.enable_tracing:
        mcp.add_middleware(ToolCallTracingMiddleware())

    for descriptor in TOOL_REGISTRY:
        logger.debug("Registering tool: %s (%s)", descriptor.name, descriptor.provider.value)
        mcp.add_tool(RegistryTool.from_descriptor(descriptor, dispatcher))

    logger.info(
        "Registered %d tools, %d available",
        len(TOOL_REGISTRY),
        len(get_available_tools(config)),
    )
    return mcp


# =============================================================================
# TRANSPORT / MAIN ENTRY POINT
# =============================================================================


def run_stdio_server(config: ServerConfig) -> None:
    logger.info("Starting %s v%s on stdio transport", config.server_name, config.server_version)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if config.enable_tracing:
        configure_tracing(config)

    mcp = create_server(config)
    mcp.run(transport="stdio", show_banner=False)


def main() -> None:
    """Entry point for ``movie-metadata-mcp`` and ``python -m movie_metadata_mcp``."""
    config = get_config()
    configure_logging(config)

    try:
        run_stdio_server(config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
