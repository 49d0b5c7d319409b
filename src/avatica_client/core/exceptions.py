"""Exception hierarchy for the Avatica client.

Transport and server failures share the NetworkError branch so callers can
treat them as one opaque failure; the subclasses only add detail.
"""

from __future__ import annotations


class AvaticaError(Exception):
    """Base exception for all Avatica client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NetworkError(AvaticaError):
    """Unreachable endpoint, non-success status, malformed body."""


class ServerError(NetworkError):
    """Error payload returned by the Avatica server."""

    def __init__(
        self,
        message: str,
        *,
        error_code: int | None = None,
        sql_state: str | None = None,
        severity: str | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.sql_state = sql_state
        self.severity = severity


class ProtocolError(NetworkError):
    """Response body does not have the expected shape."""


class TimeoutError(NetworkError):
    """Call deadline exceeded."""


class InterfaceError(AvaticaError):
    """Client-side misuse, such as using a closed connection."""


class ConfigError(AvaticaError):
    """Invalid client configuration."""
