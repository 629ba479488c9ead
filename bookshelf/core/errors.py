"""Exceptions raised by the storage layer and their HTTP translation."""

from sqlalchemy.exc import DBAPIError

DUPLICATE_TITLE_MESSAGE = "Book with the same title already exists"


class BookshelfError(Exception):
    """Base class for errors raised by this package."""


class StartupError(BookshelfError):
    """Configuration is missing or the database cannot be reached."""


class BookStorageError(BookshelfError):
    """A statement against the books table failed."""


class DuplicateTitleError(BookStorageError):
    """The database refused an insert."""

    def __init__(self, message: str = DUPLICATE_TITLE_MESSAGE):
        super().__init__(message)


class BookExtractionError(BookStorageError):
    """The inserted row came back without a usable id."""


def translate_insert_error(exc: Exception) -> BookStorageError:
    """Map a failure raised by the insert statement to a storage error.

    Every error reported by the database itself is treated as a duplicate
    title, whatever its actual class (unique violation, check violation,
    lost connection). Callers rely on the 400 response this produces.
    """
    if isinstance(exc, DBAPIError):
        return DuplicateTitleError()
    return BookStorageError(str(exc))
