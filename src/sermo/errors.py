from __future__ import annotations

"""Exception types raised by the send operations.

Transport failures (DNS, TLS, connect/read timeouts) are *not* wrapped: they
surface as the ``requests`` exception that caused them.
"""

from typing import Any, Sequence


class SermoError(Exception):
    """Base class for all library errors.

    Keyword arguments are kept in ``context`` and rendered after the message,
    e.g. ``HTTP error: 401 (provider=openai, model=gpt-4o)``.
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context = context

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base} ({ctx})"
        return base


class ConfigurationError(SermoError):
    """A profile or environment setting is missing or malformed."""


class HttpStatusError(SermoError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str, **context: Any):
        super().__init__(f"HTTP error: {status_code}", **context)
        self.status_code = status_code
        self.body = body


class ResponseParseError(SermoError):
    """The response body is not valid JSON."""

    def __init__(self, message: str, body: str = "", **context: Any):
        super().__init__(message, **context)
        self.body = body


class SchemaError(SermoError):
    """The response parsed but the expected field is absent or mis-shaped."""


class PathNotFoundError(SchemaError):
    def __init__(self, path: Sequence[str | int], position: int, reason: str):
        self.path = tuple(path)
        self.position = position
        shown = "".join(f"[{seg}]" if isinstance(seg, int) else f".{seg}" for seg in self.path[: position + 1])
        super().__init__(f"Path not found at {shown.lstrip('.') or '<root>'}: {reason}")


__all__ = [
    "SermoError",
    "ConfigurationError",
    "HttpStatusError",
    "ResponseParseError",
    "SchemaError",
    "PathNotFoundError",
]
