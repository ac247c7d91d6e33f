"""Exception hierarchy for the Leantime MCP server."""

from typing import Any, List, Optional


class LeantimeError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(LeantimeError):
    """A required setting is missing at startup."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class TransportError(LeantimeError):
    """The HTTP exchange with Leantime failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, reason: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class UpstreamError(LeantimeError):
    """Leantime answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(f"JSON-RPC error: {message} (code: {code})")
        self.code = code
        self.rpc_message = message
        self.data = data


class NotFoundError(LeantimeError):
    """A record required by a tool does not exist upstream."""


class ValidationError(LeantimeError):
    """Tool arguments do not match the declared shape."""
