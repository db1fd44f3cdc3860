"""
hchk Error Taxonomy
====================
Every failure the API layer reports is one of these. The command layer
catches HchkError and turns it into a one-line message and exit code 1.

    ValidationError   local precondition failed, nothing was sent
    TransportError    connection, DNS, TLS or timeout failure
    ApiStatusError    the service answered with a non-2xx status
    DecodeError       the body was not the JSON we expected
"""

from typing import Optional


class HchkError(Exception):
    """Base exception for hchk errors."""

    kind = "error"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(HchkError):
    """Input rejected before any request was made."""

    kind = "validation error"


class CredentialError(ValidationError):
    """No API key could be resolved."""

    kind = "credential error"


class TransportError(HchkError):
    """The request never got an HTTP response."""

    kind = "transport error"


class ApiStatusError(HchkError):
    """The service responded with a status outside 2xx."""

    kind = "api error"

    def __init__(self, status_code: int, body: str = "", url: str = ""):
        detail = body.strip() if body else ""
        message = f"HTTP {status_code}"
        if detail:
            message = f"{message}: {detail[:200]}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.url = url


class DecodeError(HchkError):
    """The response body could not be decoded into checks."""

    kind = "decode error"
