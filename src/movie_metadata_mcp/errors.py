"""Exception taxonomy for tool execution.

Every exception here is raised inside a provider client or a tool handler
and caught at the dispatcher boundary, where it becomes an error result
(``isError: true``) whose text is ``"Error: " + str(exc)``. None of them is
ever fatal to the server process.
"""

from pydantic import ValidationError


class MovieMetadataError(Exception):
    """Base class for expected tool failures."""


class ConfigurationError(MovieMetadataError):
    """A tool needs a provider whose API key is not set."""


class ProviderHTTPError(MovieMetadataError):
    """A provider answered with a non-2xx status, or could not be reached."""

    def __init__(self, provider: str, status: int | None, reason: str):
        self.provider = provider
        self.status = status
        self.reason = reason
        if status is None:
            message = f"{provider} API error: {reason}"
        else:
            message = f"{provider} API error: {status} {reason}"
        super().__init__(message)


class NotFoundError(MovieMetadataError):
    """The provider answered 2xx but flagged the record as missing."""


class ArgumentError(MovieMetadataError):
    """Tool arguments are missing or have the wrong shape."""

    @classmethod
    def from_validation_error(cls, tool_name: str, exc: ValidationError) -> "ArgumentError":
        """Condense a pydantic ValidationError into a single readable line."""
        problems = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"]) or "arguments"
            problems.append(f"{location}: {error['msg']}")
        return cls(f"Invalid arguments for {tool_name}: " + "; ".join(problems))


class UnknownToolError(MovieMetadataError):
    """The requested tool name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")
