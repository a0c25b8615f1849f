"""Turn feed posts into electronic book stubs."""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from bookcatalog.errors import DecodeFailure
from bookcatalog.models import Book

logger = logging.getLogger(__name__)

# Every imported post becomes the same kind of stub
IMPORT_PUBLICATION_DATE = date(2020, 1, 1)
IMPORT_GENRE = "general"
IMPORT_FILE_SIZE_MB = 10
REQUIRED_FIELDS = ("id", "userId", "title")


def parse_post(item: Dict[str, Any], today: Optional[date] = None) -> Book:
    """
    Map a single feed post to an electronic book.

    Args:
        item: Post object with at least ``id``, ``userId`` and ``title``
        today: Reference date for the age snapshot

    Returns:
        Electronic Book

    Raises:
        DecodeFailure: If the item is not an object or lacks a required field
    """
    if not isinstance(item, dict):
        raise DecodeFailure(f"Expected a post object, got {type(item).__name__}")

    missing = [name for name in REQUIRED_FIELDS if name not in item]
    if missing:
        raise DecodeFailure(f"Post is missing fields: {', '.join(missing)}")

    return Book.electronic(
        title=str(item["title"]),
        author=f"User {item['userId']}",
        isbn=f"123{item['id']}",
        publication_date=IMPORT_PUBLICATION_DATE,
        genre=IMPORT_GENRE,
        file_size_mb=IMPORT_FILE_SIZE_MB,
        today=today,
    )


def parse_feed_response(response_json: Any, today: Optional[date] = None) -> List[Book]:
    """
    Parse a full feed response.

    Args:
        response_json: Decoded response body, expected to be a list of posts
        today: Reference date for the age snapshot

    Returns:
        List of electronic books in feed order

    Raises:
        DecodeFailure: If the body is not a list of valid posts
    """
    if not isinstance(response_json, list):
        raise DecodeFailure(
            f"Expected a list of posts, got {type(response_json).__name__}"
        )

    books = [parse_post(item, today) for item in response_json]
    logger.debug(f"Parsed {len(books)} posts into books")
    return books
