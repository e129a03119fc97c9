"""Error taxonomy shared by every surface.

Validation errors carry messages that are safe to show to an external caller.
``HandlerFailure`` always carries the same fixed message; the handler's own
exception is chained as ``__cause__`` for in-process debugging only.
"""

from __future__ import annotations

HANDLER_FAILURE_MESSAGE = "tool execution failed"
MALFORMED_INPUT_MESSAGE = "invalid arguments"


class YeahnoError(Exception):
    """Base class for all yeahno errors."""


class ConfigurationError(YeahnoError):
    """Raised at build/registration time when a menu cannot be exposed."""


class UnknownToolError(YeahnoError):
    """Raised when a surface is asked for a tool name it does not serve."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name: str = name


class FieldValidationError(YeahnoError):
    """Raised when a single field fails validation."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key: str = key


class MissingRequiredField(FieldValidationError):
    def __init__(self, key: str) -> None:
        super().__init__(key, f"missing required field: {key}")


class FieldTooLong(FieldValidationError):
    def __init__(self, key: str, limit: int) -> None:
        super().__init__(key, f"{key} exceeds maximum length of {limit}")
        self.limit: int = limit


class InvalidFormat(FieldValidationError):
    def __init__(self, key: str, reason: str) -> None:
        super().__init__(key, f"invalid {key}: {reason}")
        self.reason: str = reason


class InvalidValue(FieldValidationError):
    def __init__(self, key: str, reason: str) -> None:
        super().__init__(key, f"invalid {key}: {reason}")
        self.reason: str = reason


class MalformedInput(YeahnoError):
    """Raised when raw input is not a flat string-keyed mapping."""

    def __init__(self, message: str = MALFORMED_INPUT_MESSAGE) -> None:
        super().__init__(message)


class HandlerFailure(YeahnoError):
    """Raised in place of any exception coming out of a menu handler."""

    def __init__(self, tool_name: str = "") -> None:
        super().__init__(HANDLER_FAILURE_MESSAGE)
        self.tool_name: str = tool_name
