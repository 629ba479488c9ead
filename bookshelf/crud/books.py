"""Statements against the `books` table.

Each operation borrows one connection from the pool for a single statement
and hands it back before returning.
"""
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import BookExtractionError, BookStorageError, translate_insert_error
from ..schemas.book import Book, NewBook

SELECT_BOOKS = text("SELECT * FROM books")

INSERT_BOOK = text(
    """
    INSERT INTO books (title, author, price, pages, is_published)
    VALUES (:title, :author, :price, :pages, :is_published)
    RETURNING id, title, author, price, pages, is_published
    """
)


def row_to_book(row: Mapping[str, Any]) -> Book:
    """Build a Book from a `books` row mapping."""
    return Book(
        id=row["id"],
        title=row["title"],
        author=row["author"],
        price=row["price"],
        pages=row["pages"],
        is_published=bool(row["is_published"]),
    )


def list_books(pool: Engine) -> list[Book]:
    try:
        with pool.connect() as conn:
            rows = conn.execute(SELECT_BOOKS).mappings().all()
        return [row_to_book(row) for row in rows]
    except (SQLAlchemyError, ValidationError, KeyError) as exc:
        raise BookStorageError(f"Failed to list books: {exc}") from exc


def _extract_id(row: Mapping[str, Any] | None) -> int:
    if row is None:
        raise BookExtractionError("INSERT returned no row")
    try:
        book_id = row["id"]
    except KeyError as exc:
        raise BookExtractionError("INSERT row has no id column") from exc
    if not isinstance(book_id, int) or isinstance(book_id, bool):
        raise BookExtractionError(f"INSERT returned a non-integer id: {book_id!r}")
    return book_id


def insert_book(pool: Engine, new_book: NewBook) -> Book:
    """Insert `new_book` and return it with the id assigned by the database."""
    try:
        with pool.begin() as conn:
            row = conn.execute(INSERT_BOOK, new_book.model_dump()).mappings().first()
            # raising here rolls the insert back
            book_id = _extract_id(row)
    except SQLAlchemyError as exc:
        raise translate_insert_error(exc) from exc

    return Book(id=book_id, **new_book.model_dump())
