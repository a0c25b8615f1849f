"""Exceptions raised by the catalog core."""
from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog operations."""


class PositionOutOfRangeError(CatalogError, IndexError):
    """A position does not refer to a book in the collection."""

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(
            f"Position {position} is out of range for a catalog of {size} books"
        )


class BookNotFoundError(CatalogError, KeyError):
    """No book in the collection carries the given id."""

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(book_id)

    def __str__(self):
        return f"No book with id {self.book_id!r}"


class NetworkFailure(CatalogError):
    """
    The feed request did not succeed.

    Attributes:
        url: Requested URL
        status_code: HTTP status, or None when the request never got a response
    """

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DecodeFailure(CatalogError):
    """The feed response body is not the expected item list."""
