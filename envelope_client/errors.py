"""Exceptions raised by the verification client."""

from __future__ import annotations

from typing import List, Optional, Tuple


class VerifierError(RuntimeError):
    """Base class for every failure surfaced by the client."""


class ConfigurationError(VerifierError):
    """Raised when required credential material is missing."""


class TransportError(VerifierError):
    """Raised when a single endpoint could not be reached."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class AggregateTransportError(TransportError):
    """Raised once every configured endpoint failed."""

    def __init__(self, errors: List[Tuple[str, Exception]]) -> None:
        lines = ["All the base URLs are unreachable."]
        lines.extend(f"{url} => {err}" for url, err in errors)
        super().__init__("\n".join(lines))
        self.errors = errors


class AuthenticationError(VerifierError):
    """Raised on HTTP 401/403; never retried against another endpoint."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            "Can't authenticate using the provided credential "
            f"(HTTP status code: {status_code})"
        )
        self.status_code = status_code


class CancelledError(VerifierError):
    """Raised when the caller's cancellation token fires."""


class DecodingError(VerifierError):
    """Raised when a response body can't be decoded."""


class ProtocolError(VerifierError):
    """Raised on a status code with no documented meaning for the call."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"Unexpected HTTP response status code: {status_code}"
        )
        self.status_code = status_code


class SubmissionError(ProtocolError):
    """Raised when the server refuses a job submission."""


class UnresolvedContentTypeError(VerifierError):
    """Raised when a file's content type can't be inferred."""
