"""Exception taxonomy for the Open PHACTS client.

Transport failures are normally reported through ``ApiResponse`` rather
than raised; the exceptions here cover data-contract mismatches and the
explicit ``ApiResponse.unwrap()`` path.
"""

from __future__ import annotations


class OpenPhactsError(Exception):
    """Base class for all errors raised by this package."""

    pass


class ShapeError(OpenPhactsError):
    """Raised when a field the response contract requires is absent."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Required field missing from response: {path}")


class TransportError(OpenPhactsError):
    """Raised when an unsuccessful ``ApiResponse`` is unwrapped."""

    def __init__(self, url: str, status: int | None, detail: str | None = None) -> None:
        self.url = url
        self.status = status
        self.detail = detail
        reason = f"HTTP {status}" if status is not None else (detail or "no response")
        super().__init__(f"Request to {url} failed: {reason}")
