"""Error taxonomy for library mutations and catalog searches."""

from __future__ import annotations


class LibraryError(Exception):
    """Base class for all paper-shelf errors."""


class ValidationError(LibraryError, ValueError):
    """Malformed input: an import candidate without a title, or an unknown enum value."""


class RangeError(LibraryError, ValueError):
    """A rating or page number outside its allowed range."""


class NotFoundError(LibraryError, LookupError):
    """A lookup referenced a paper id (or section) that does not exist."""


class FetchError(LibraryError):
    """The external catalog could not be reached or returned an unreadable document.

    ``status_code`` carries the HTTP status when the catalog (or proxy)
    answered with an error response, and is None for transport or parse
    failures.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "FetchError",
    "LibraryError",
    "NotFoundError",
    "RangeError",
    "ValidationError",
]
