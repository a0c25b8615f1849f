"""Tests for the in-memory catalog manager."""
from datetime import date

import pytest

from bookcatalog.errors import BookNotFoundError, PositionOutOfRangeError
from bookcatalog.manager import BookManager
from bookcatalog.models import Book

TODAY = date(2024, 1, 1)


def _book(title, author="Someone", genre="fiction"):
    return Book.base(title, author, "123", "2010-05-05", genre, today=TODAY)


@pytest.fixture
def manager():
    manager = BookManager()
    manager.add(_book("Gamma", author="Carol"))
    manager.add(_book("alpha", author="Alice", genre="SciFi"))
    manager.add(_book("Beta", author="Bob", genre="history"))
    return manager


def test_add_appends_in_insertion_order():
    """Test add without an edit in progress appends."""
    manager = BookManager()
    a = _book("B title")
    b = _book("A title")

    manager.add(a)
    manager.add(b)

    assert manager.books == [a, b]
    assert manager.query() == [b, a]
    assert manager.editing_index is None


def test_add_allows_duplicate_isbn():
    """Test duplicate ISBNs are accepted."""
    manager = BookManager()
    manager.add(_book("One"))
    manager.add(_book("Two"))
    assert len(manager) == 2


def test_query_sorts_by_title_case_insensitively(manager):
    """Test query ordering ignores case."""
    assert [book.title for book in manager.query()] == ["alpha", "Beta", "Gamma"]


def test_query_does_not_reorder_books(manager):
    """Test query returns a new list and leaves the catalog order alone."""
    result = manager.query()
    result.clear()
    assert [book.title for book in manager.books] == ["Gamma", "alpha", "Beta"]


def test_query_search_matches_title_or_author(manager):
    """Test free-text search over title and author."""
    assert [book.title for book in manager.query("GAM")] == ["Gamma"]
    assert [book.title for book in manager.query("bob")] == ["Beta"]
    assert [book.title for book in manager.query("a")] == ["alpha", "Beta", "Gamma"]
    assert manager.query("nothing matches") == []


def test_query_genre_filter(manager):
    """Test genre filter is exact and case-insensitive."""
    assert [book.title for book in manager.query("", "scifi")] == ["alpha"]
    assert [book.title for book in manager.query("", "HISTORY")] == ["Beta"]
    assert manager.query("", "sci") == []


def test_query_search_and_genre_combined(manager):
    """Test both conditions must hold."""
    assert [book.title for book in manager.query("alice", "scifi")] == ["alpha"]
    assert manager.query("bob", "scifi") == []


def test_begin_edit_then_add_replaces(manager):
    """Test editing overwrites the position and clears the cursor."""
    original = manager.books[1]
    replacement = Book.printed("Delta", "Dan", "9", "2015-02-02", "fiction", 200, today=TODAY)

    returned = manager.begin_edit(1)
    assert returned is original
    assert manager.editing_index == 1
    assert original in manager.books

    manager.add(replacement)

    assert len(manager) == 3
    assert manager.books[1] is replacement
    assert original not in manager.books
    assert manager.editing_index is None


def test_cancel_edit(manager):
    """Test cancelling an edit makes the next add append."""
    manager.begin_edit(0)
    manager.cancel_edit()
    manager.add(_book("Epsilon"))

    assert len(manager) == 4
    assert manager.books[-1].title == "Epsilon"


def test_delete_shifts_positions(manager):
    """Test deleting position 0 moves the others down."""
    second, third = manager.books[1], manager.books[2]

    removed = manager.delete(0)

    assert removed.title == "Gamma"
    assert manager.books == [second, third]


@pytest.mark.parametrize("position", [3, 10, -1])
def test_delete_out_of_range(manager, position):
    """Test invalid positions raise and leave the catalog intact."""
    with pytest.raises(PositionOutOfRangeError):
        manager.delete(position)
    assert len(manager) == 3


def test_begin_edit_out_of_range(manager):
    """Test an invalid edit position leaves the cursor unset."""
    with pytest.raises(IndexError):
        manager.begin_edit(5)
    assert manager.editing_index is None


def test_stable_id_operations(manager):
    """Test lookups by book id survive position shifts."""
    beta = manager.books[2]

    manager.delete(0)

    assert manager.position_of(beta.book_id) == 1
    assert manager.get(beta.book_id) is beta
    assert manager.begin_edit_by_id(beta.book_id) is beta
    assert manager.editing_index == 1

    manager.cancel_edit()
    assert manager.delete_by_id(beta.book_id) is beta
    assert len(manager) == 1


def test_stale_id_raises(manager):
    """Test a deleted book's id no longer resolves."""
    gamma = manager.delete(0)

    with pytest.raises(BookNotFoundError):
        manager.delete_by_id(gamma.book_id)
    assert len(manager) == 2


def test_extend_ignores_editing_cursor(manager):
    """Test merging a batch appends even while editing."""
    manager.begin_edit(0)
    manager.extend([_book("X"), _book("Y")])

    assert len(manager) == 5
    assert manager.editing_index == 0
    assert [book.title for book in manager][-2:] == ["X", "Y"]


def _titled(*titles):
    manager = BookManager()
    for title in titles:
        manager.add(_book(title))
    return manager


def test_delete_below_edit_keeps_cursor_on_edited_book():
    """Test deleting an earlier book while editing still replaces the edited one."""
    manager = _titled("a", "b", "c", "d")
    manager.begin_edit(2)

    manager.delete(0)
    assert manager.editing_index == 1

    manager.add(_book("c-edited"))

    assert [book.title for book in manager] == ["b", "c-edited", "d"]
    assert manager.editing_index is None


def test_delete_above_edit_leaves_cursor():
    """Test deleting a later book while editing does not move the cursor."""
    manager = _titled("a", "b", "c")
    manager.begin_edit(0)

    manager.delete(2)
    manager.add(_book("a-edited"))

    assert [book.title for book in manager] == ["a-edited", "b"]


def test_delete_edited_book_cancels_edit():
    """Test deleting the book being edited clears the cursor so add appends."""
    manager = _titled("a", "b", "c")
    manager.begin_edit(2)

    manager.delete(2)
    assert manager.editing_index is None

    manager.add(_book("new"))
    manager.add(_book("newer"))

    assert [book.title for book in manager] == ["a", "b", "new", "newer"]


def test_delete_by_id_while_editing():
    """Test id-based deletes adjust the cursor the same way."""
    manager = _titled("a", "b", "c")
    first = manager.books[0]
    manager.begin_edit(1)

    manager.delete_by_id(first.book_id)
    manager.add(_book("b-edited"))

    assert [book.title for book in manager] == ["b-edited", "c"]


def test_query_sorts_accented_titles_with_their_base_letter():
    """Test accented titles sort next to their unaccented letter."""
    manager = _titled("Zebra", "éclair", "apple", "Eagle", "Élan")

    assert [book.title for book in manager.query()] == ["apple", "Eagle", "éclair", "Élan", "Zebra"]
