"""Data models for catalog books."""
import uuid
from dataclasses import InitVar, asdict, dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Union

DEFAULT_DISCOUNT = 0.10
DEFAULT_CATEGORY = "General"

GENRE_CATEGORIES = {
    "fiction": "Entertainment",
    "science": "Educational",
    "history": "Informational",
    "biography": "Inspirational",
    "technology": "Technical",
    "romance": "Emotional",
}


class BookKind(str, Enum):
    """The closed set of book variants."""
    BASE = "base"
    ELECTRONIC = "electronic"
    PRINTED = "printed"


class BookAge(NamedTuple):
    """Calendar difference between a publication date and today."""
    years: int
    months: int
    days: int

    def __str__(self) -> str:
        return f"{self.years} years {self.months} months {self.days} days"


def parse_date(value: Union[str, date]) -> date:
    """Accept a date, a datetime or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def _days_in_previous_month(today: date) -> int:
    return (today.replace(day=1) - timedelta(days=1)).day


def compute_age(publication_date: Union[str, date], today: Optional[date] = None) -> BookAge:
    """
    Compute the age of a book as whole years, months and days.

    Borrows once from the month before ``today`` when the day difference is
    negative. The borrow does not cascade, so ``days`` can stay negative when
    the publication day is later than the length of that month.

    Args:
        publication_date: Publication date (date or ISO string)
        today: Reference date, defaults to the current local date

    Returns:
        BookAge tuple
    """
    published = parse_date(publication_date)
    today = today or date.today()

    years = today.year - published.year
    months = today.month - published.month
    days = today.day - published.day

    if days < 0:
        months -= 1
        days += _days_in_previous_month(today)
    if months < 0:
        years -= 1
        months += 12

    return BookAge(years, months, days)


def categorize(genre: str) -> str:
    """Map a genre to its category label, case-insensitively."""
    return GENRE_CATEGORIES.get(genre.lower(), DEFAULT_CATEGORY)


def discounted_price(price: float, discount: float = DEFAULT_DISCOUNT) -> str:
    """Return the price after discount, formatted with two decimals."""
    return f"{price - price * discount:.2f}"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _is_positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


@dataclass(frozen=True)
class Book:
    """
    One catalog entry.

    ``age`` and ``category`` are snapshots computed at construction. Build
    instances with ``Book.base``, ``Book.electronic``, ``Book.printed`` or
    ``make_book``; editing replaces the instance instead of mutating it.
    """
    title: str
    author: str
    isbn: str
    publication_date: date
    genre: str
    kind: BookKind = BookKind.BASE
    file_size_mb: Optional[float] = None
    page_count: Optional[int] = None
    book_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    age: str = field(init=False)
    category: str = field(init=False)
    today: InitVar[Optional[date]] = None

    def __post_init__(self, today: Optional[date]):
        published = parse_date(self.publication_date)
        object.__setattr__(self, "publication_date", published)
        object.__setattr__(self, "kind", BookKind(self.kind))
        self._check_variant()
        object.__setattr__(self, "age", str(compute_age(published, today)))
        object.__setattr__(self, "category", categorize(self.genre))

    def _check_variant(self):
        if self.kind is BookKind.PRINTED:
            valid = _is_positive(self.page_count) and self.file_size_mb is None
        elif self.kind is BookKind.ELECTRONIC:
            valid = _is_positive(self.file_size_mb) and self.page_count is None
        else:
            valid = self.page_count is None and self.file_size_mb is None
        if not valid:
            raise ValueError(
                f"Invalid {self.kind.value} book: "
                f"page_count={self.page_count!r}, file_size_mb={self.file_size_mb!r}"
            )

    @classmethod
    def base(cls, title, author, isbn, publication_date, genre, today=None) -> "Book":
        return cls(title, author, isbn, publication_date, genre, today=today)

    @classmethod
    def electronic(
        cls, title, author, isbn, publication_date, genre, file_size_mb, today=None
    ) -> "Book":
        return cls(
            title, author, isbn, publication_date, genre,
            kind=BookKind.ELECTRONIC, file_size_mb=file_size_mb, today=today
        )

    @classmethod
    def printed(
        cls, title, author, isbn, publication_date, genre, page_count, today=None
    ) -> "Book":
        return cls(
            title, author, isbn, publication_date, genre,
            kind=BookKind.PRINTED, page_count=page_count, today=today
        )

    @property
    def publication_date_iso(self) -> str:
        """Publication date as ``YYYY-MM-DD``, the form an edit form expects."""
        return self.publication_date.isoformat()

    def render_detail(self) -> str:
        """Variant-specific detail line; empty for base books."""
        if self.kind is BookKind.ELECTRONIC:
            return f"File Size: {_format_number(self.file_size_mb)} MB"
        if self.kind is BookKind.PRINTED:
            return f"Pages: {self.page_count}"
        return ""

    def discounted_price(self, price: float, discount: float = DEFAULT_DISCOUNT) -> str:
        return discounted_price(price, discount)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        data["publication_date"] = self.publication_date_iso
        return data


def make_book(
    title: str,
    author: str,
    isbn: str,
    publication_date: Union[str, date],
    genre: str,
    page_count: Optional[int] = 0,
    file_size_mb: Optional[float] = 0,
    today: Optional[date] = None
) -> Book:
    """
    Build a book, picking the variant from the extra fields.

    A positive page count selects a printed book, otherwise a positive file
    size selects an electronic book, otherwise a base book is created.

    Args:
        title: Book title
        author: Author name
        isbn: ISBN text
        publication_date: Publication date (date or ISO string)
        genre: Free-text genre
        page_count: Page count, 0 or None when not printed
        file_size_mb: File size in MB, 0 or None when not electronic
        today: Reference date for the age snapshot

    Returns:
        Book of the selected variant
    """
    if page_count and page_count > 0:
        return Book.printed(title, author, isbn, publication_date, genre, page_count, today=today)
    if file_size_mb and file_size_mb > 0:
        return Book.electronic(title, author, isbn, publication_date, genre, file_size_mb, today=today)
    return Book.base(title, author, isbn, publication_date, genre, today=today)
