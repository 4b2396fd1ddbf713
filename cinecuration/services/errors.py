"""Domain errors raised by the service layer and mapped to HTTP codes in ``main``."""

from __future__ import annotations


class CurationError(Exception):
    """Base exception for service-level failures."""


class ValidationError(CurationError):
    """Raised when request input is missing or malformed (400)."""

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or [message]


class NotFoundError(CurationError):
    """Raised when a lookup yields nothing (404)."""


class AcquisitionFailure(CurationError):
    """Raised when a movie could not be fetched from TMDb and cached (500)."""


class PersistenceError(CurationError):
    """Raised when the relational store fails a read or write (500)."""
