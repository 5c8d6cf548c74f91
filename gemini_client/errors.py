"""
Exception hierarchy for gemini-client.

Every failure propagates to the caller unchanged in cause; these types only
add the context needed to diagnose it (HTTP status, offending payload).
"""

from typing import Optional


class GeminiError(Exception):
    """Base error for everything raised by gemini-client."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class TransportFailure(GeminiError):
    """I/O-level failure: connection error, timeout or HTTP error status."""
    pass


class MalformedResponse(GeminiError):
    """
    Response body or stream event that does not match the expected shape.

    `payload` holds the raw body (unary calls) or the offending line (streams).
    """

    def __init__(self, message: str, payload: str):
        super().__init__(f"{message}:\n{payload}")
        self.payload = payload


class UnsupportedTurnKind(GeminiError, TypeError):
    """A conversation turn outside the closed set of turn kinds was encoded."""
    pass
