"""
Handler interface shared by every tool.

A handler owns three steps of a tool call:

1. Validate the raw argument mapping against its ``arguments_model``
   (failing closed with ``ArgumentError``)
2. Fetch from its provider and shape the response (``execute``)
3. Serialize the shaped payload as 2-space indented JSON

The dispatcher only ever sees ``invoke(arguments) -> str``.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from ..errors import ArgumentError
from ..providers import OmdbClient, TmdbClient


def to_text(payload: Any) -> str:
    """Render a shaped payload the way every tool returns it."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def names_of(items: list[dict[str, Any]]) -> list[str]:
    """Flatten TMDB ``[{"id": ..., "name": ...}]`` lists to their names."""
    return [item["name"] for item in items]


class ToolHandler(ABC):
    """One tool's validation, provider call and response shaping."""

    arguments_model: ClassVar[type[BaseModel]]

    def __init__(self, name: str, *, omdb: OmdbClient, tmdb: TmdbClient):
        self.name = name
        self.omdb = omdb
        self.tmdb = tmdb

    def parse_arguments(self, arguments: Mapping[str, Any]) -> Any:
        if not isinstance(arguments, Mapping):
            raise ArgumentError(f"Invalid arguments for {self.name}: expected an object")
        try:
            return self.arguments_model.model_validate(dict(arguments))
        except ValidationError as e:
            raise ArgumentError.from_validation_error(self.name, e) from e

    async def invoke(self, arguments: Mapping[str, Any]) -> str:
        params = self.parse_arguments(arguments)
        payload = await self.execute(params)
        return to_text(payload)

    @abstractmethod
    async def execute(self, params: Any) -> Any:
        """Call the provider and return the JSON-serializable payload."""
