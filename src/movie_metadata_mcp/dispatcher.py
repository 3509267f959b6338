"""
Tool dispatcher: routes a tool name to its handler and turns the outcome
into a ``ToolResult``.

Contract for ``call_tool(name, arguments)``:

1. Unknown name -> error result ``"Error: Unknown tool: <name>"``
2. Otherwise the handler runs with the raw arguments
3. Normal completion -> success result carrying the handler's text
4. Any exception -> error result ``"Error: <message>"``

Nothing raised by a handler escapes ``call_tool``. Availability is not
checked here: a tool whose provider has no key is still callable by name,
and the provider client's own precondition reports the missing key.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from mcp.types import TextContent
from pydantic import BaseModel

from .config import ServerConfig
from .errors import MovieMetadataError, UnknownToolError
from .providers import OmdbClient, TmdbClient
from .registry import TOOL_REGISTRY, ToolDescriptor
from .tools import ToolHandler

logger = logging.getLogger(__name__)


class ToolResult(BaseModel):
    """Outcome of one tool call: a single text block plus an error flag."""

    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(type="text", text=text)])

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(type="text", text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        return self.content[0].text


class ToolDispatcher:
    """Maps tool names to handlers built from the registry."""

    def __init__(
        self,
        config: ServerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        registry: tuple[ToolDescriptor, ...] = TOOL_REGISTRY,
    ):
        self.config = config
        omdb = OmdbClient(config, transport=transport)
        tmdb = TmdbClient(config, transport=transport)
        self._handlers: dict[str, ToolHandler] = {
            descriptor.name: descriptor.handler(descriptor.name, omdb=omdb, tmdb=tmdb)
            for descriptor in registry
        }

    def has_tool(self, name: str) -> bool:
        return name in self._handlers

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        logger.debug("Calling tool %s with %s", name, arguments)
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            text = await handler.invoke(arguments if arguments is not None else {})
        except MovieMetadataError as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResult.failure(str(e))
        except Exception as e:
            # Malformed provider payloads land here (missing keys and the like)
            logger.exception("Unexpected error in tool %s", name)
            return ToolResult.failure(str(e) or type(e).__name__)

        logger.info("Tool %s completed", name)
        return ToolResult.success(text)
