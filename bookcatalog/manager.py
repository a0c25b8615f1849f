"""In-memory catalog of books."""
import locale
import logging
import unicodedata
from typing import Iterable, Iterator, List, Optional

from bookcatalog.async_client import AsyncFeedClient
from bookcatalog.client import FeedClient
from bookcatalog.errors import BookNotFoundError, PositionOutOfRangeError
from bookcatalog.models import Book
from bookcatalog.parse import parse_feed_response

logger = logging.getLogger(__name__)


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _title_sort_key(book: Book):
    # Accent-folded title first, so ordering holds under the C locale too;
    # strxfrm applies the active LC_COLLATE within a group; raw title breaks ties
    folded = _fold_accents(book.title)
    return (locale.strxfrm(folded), locale.strxfrm(book.title.casefold()), book.title)


class BookManager:
    """
    Ordered collection of books with a single-slot editing cursor.

    Positions are indexes into ``books`` at the time of the call and shift
    after a delete. ``book_id`` is the stable way to refer to a book.
    """

    def __init__(
        self,
        feed_client: Optional[FeedClient] = None,
        async_feed_client: Optional[AsyncFeedClient] = None
    ):
        """
        Initialize an empty catalog.

        Args:
            feed_client: Blocking feed client (a default one is opened per import)
            async_feed_client: Async feed client (a default one is opened per import)
        """
        self.books: List[Book] = []
        self.editing_index: Optional[int] = None
        self.feed_client = feed_client
        self.async_feed_client = async_feed_client

    def __len__(self) -> int:
        return len(self.books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self.books)

    def _check_position(self, position: int):
        if not 0 <= position < len(self.books):
            raise PositionOutOfRangeError(position, len(self.books))

    def add(self, book: Book):
        """Append a book, or overwrite the book being edited."""
        if self.editing_index is not None:
            logger.debug(f"Replacing book at position {self.editing_index}: {book.title}")
            self.books[self.editing_index] = book
            self.editing_index = None
        else:
            logger.debug(f"Adding book: {book.title}")
            self.books.append(book)

    def extend(self, books: Iterable[Book]):
        """Append a batch of books, ignoring the editing cursor."""
        books = list(books)
        self.books.extend(books)
        logger.debug(f"Appended {len(books)} books")

    def delete(self, position: int) -> Book:
        """
        Remove the book at a position.

        Later books move down by one, so positions held by callers go stale.
        The editing cursor follows the book being edited; deleting that book
        clears the cursor, so the next ``add`` appends.

        Raises:
            PositionOutOfRangeError: If the position is not a valid index
        """
        self._check_position(position)
        book = self.books.pop(position)
        logger.debug(f"Deleted book at position {position}: {book.title}")

        if self.editing_index is not None:
            if position == self.editing_index:
                logger.debug("Deleted the book being edited, edit cancelled")
                self.editing_index = None
            elif position < self.editing_index:
                self.editing_index -= 1
        return book

    def begin_edit(self, position: int) -> Book:
        """
        Mark a position for replacement by the next ``add`` and return its book.

        The book stays in the collection until ``add`` overwrites it.

        Raises:
            PositionOutOfRangeError: If the position is not a valid index
        """
        self._check_position(position)
        self.editing_index = position
        return self.books[position]

    def cancel_edit(self):
        """Clear the editing cursor."""
        self.editing_index = None

    def position_of(self, book_id: str) -> int:
        for position, book in enumerate(self.books):
            if book.book_id == book_id:
                return position
        raise BookNotFoundError(book_id)

    def get(self, book_id: str) -> Book:
        return self.books[self.position_of(book_id)]

    def delete_by_id(self, book_id: str) -> Book:
        return self.delete(self.position_of(book_id))

    def begin_edit_by_id(self, book_id: str) -> Book:
        return self.begin_edit(self.position_of(book_id))

    def query(self, search_text: str = "", genre_filter: str = "") -> List[Book]:
        """
        Search and filter the catalog.

        Args:
            search_text: Substring matched against title or author, case-insensitively
            genre_filter: Exact genre match, case-insensitively; empty matches all

        Returns:
            New list of matching books sorted by title
        """
        search_text = search_text.lower()
        genre_filter = genre_filter.lower()

        matches = [
            book for book in self.books
            if (search_text in book.title.lower() or search_text in book.author.lower())
            and (not genre_filter or book.genre.lower() == genre_filter)
        ]
        return sorted(matches, key=_title_sort_key)

    async def import_external(self) -> List[Book]:
        """
        Fetch one page of feed posts as electronic books.

        The books are returned, not added; merge them with ``extend``.

        Raises:
            NetworkFailure: If the request fails or returns a non-2xx status
            DecodeFailure: If the body is not a list of posts
        """
        if self.async_feed_client is not None:
            response = await self.async_feed_client.fetch_posts()
        else:
            async with AsyncFeedClient() as client:
                response = await client.fetch_posts()

        books = parse_feed_response(response)
        logger.info(f"Imported {len(books)} books from feed")
        return books

    def import_external_sync(self) -> List[Book]:
        """Blocking variant of ``import_external`` with the same contract."""
        if self.feed_client is not None:
            response = self.feed_client.fetch_posts()
        else:
            with FeedClient() as client:
                response = client.fetch_posts()

        books = parse_feed_response(response)
        logger.info(f"Imported {len(books)} books from feed")
        return books
