#!/usr/bin/env python3
"""Book Catalog Explorer CLI - in-memory catalog & feed import."""
import argparse
import asyncio
import sys
import json
import locale
from datetime import date
from typing import List
from tabulate import tabulate
from bookcatalog.config import Config
from bookcatalog.errors import CatalogError
from bookcatalog.manager import BookManager
from bookcatalog.models import Book, categorize, compute_age, discounted_price, parse_date
import logging

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, config: Config):
    """Configure root logging for the CLI."""
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def setup_locale():
    """Use the environment's collation rules for title sorting."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Could not apply system locale, using C collation: {e}")


def _truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


def fetch_books(args) -> List[Book]:
    """Import the feed into a fresh catalog and return the queried view."""
    manager = BookManager()

    if args.sync:
        imported = manager.import_external_sync()
    else:
        imported = asyncio.run(manager.import_external())

    manager.extend(imported)
    logger.info(f"Catalog holds {len(manager)} books")

    return manager.query(args.search, args.genre)


def display_books(books: List[Book], format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        headers = ["Title", "Author", "ISBN", "Age", "Category", "Details"]
        rows = [
            [
                _truncate(book.title, 50),
                _truncate(book.author, 30),
                book.isbn,
                book.age,
                book.category,
                book.render_detail() or "-"
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([book.to_dict() for book in books], indent=2))

    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.title} - {book.author}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Book Catalog Explorer - in-memory catalog CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Import the feed and show it as a table
  %(prog)s fetch

  # Filter imported books
  %(prog)s fetch --search "qui" --genre general --format compact

  # Derived fields
  %(prog)s age 2015-06-30
  %(prog)s category Fiction
  %(prog)s discount 100 --rate 0.2
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Import books from the feed")
    fetch_parser.add_argument("--search", default="", help="Match title or author")
    fetch_parser.add_argument("--genre", default="", help="Exact genre filter")
    fetch_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    fetch_parser.add_argument("--sync", action="store_true", help="Use blocking client")

    # Age command
    age_parser = subparsers.add_parser("age", help="Age of a publication date")
    age_parser.add_argument("date", type=parse_date, help="Publication date (YYYY-MM-DD)")

    # Category command
    category_parser = subparsers.add_parser("category", help="Category for a genre")
    category_parser.add_argument("genre", help="Genre name")

    # Discount command
    discount_parser = subparsers.add_parser("discount", help="Discounted price")
    discount_parser.add_argument("price", type=float, help="Original price")
    discount_parser.add_argument("--rate", type=float, default=0.10, help="Discount fraction (default: 0.10)")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()
    setup_logging(args.verbose, config)
    setup_locale()

    try:
        if args.command == "fetch":
            display_books(fetch_books(args), args.format)

        elif args.command == "age":
            print(compute_age(args.date, date.today()))

        elif args.command == "category":
            print(categorize(args.genre))

        elif args.command == "discount":
            print(discounted_price(args.price, args.rate))

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except CatalogError as e:
        logger.error(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
