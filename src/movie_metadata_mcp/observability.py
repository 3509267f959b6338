"""Logfire tracing for tool calls.

Disabled unless ``MOVIE_METADATA_ENABLE_TRACING`` is set. Spans are only
shipped when a Logfire token is present, and nothing is written to stdout,
which belongs to the stdio transport.
"""

import logging
from typing import Any

import logfire
from fastmcp.server.middleware import Middleware, MiddlewareContext

from .config import ServerConfig

logger = logging.getLogger(__name__)


def configure_tracing(config: ServerConfig) -> None:
    logfire.configure(
        service_name=config.server_name,
        service_version=config.server_version,
        send_to_logfire="if-token-present",
        console=False,
    )
    logger.info("Logfire tracing enabled for tool calls")


class ToolCallTracingMiddleware(Middleware):
    """Wrap every ``tools/call`` in a logfire span."""

    async def on_call_tool(self, context: MiddlewareContext, call_next) -> Any:
        tool_name = context.message.name
        with logfire.span("MCP tools/call {tool_name}", tool_name=tool_name) as span:
            try:
                result = await call_next(context)
            except Exception as e:
                span.set_attribute("mcp.status", "error")
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                raise
            span.set_attribute("mcp.status", "success")
            return result
