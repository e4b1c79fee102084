"""
Exception hierarchy for flightstates.

Being rate limited is not an error: the client returns None for a
request the rate gate refuses, so callers can tell "try again later"
apart from "something is broken".
"""

from typing import Optional


class OpenSkyError(Exception):
    """Base exception for all flightstates errors."""


class ValidationError(OpenSkyError, ValueError):
    """Invalid value supplied by the caller (e.g. bounding box coordinates)."""


class AuthorizationError(OpenSkyError):
    """Operation requires authenticated access."""


class TransportError(OpenSkyError):
    """
    Recoverable I/O failure.

    Network errors, timeouts, non-2xx responses and responses whose
    character encoding is missing or unreadable. Waiting and retrying
    may help.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: str = '',
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ProtocolError(OpenSkyError):
    """
    Client/server contract violation.

    Raised for an invalid request URL or a response body that is not the
    expected JSON shape. Retrying will not help; please report a bug.
    """

    def __init__(self, message: str, endpoint: str = ''):
        self.endpoint = endpoint
        super().__init__(message)
