import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from bookshelf.main import create_app

BOOKS_DDL = """
CREATE TABLE books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL UNIQUE,
    author TEXT NOT NULL,
    price INTEGER NOT NULL,
    pages INTEGER NOT NULL,
    is_published BOOLEAN NOT NULL
)
"""


def _create_books_table(engine):
    with engine.begin() as conn:
        conn.execute(text(BOOKS_DDL))


def _count_books(engine):
    with engine.connect() as conn:
        return conn.execute(text("SELECT COUNT(*) FROM books")).scalar_one()


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def pool():
    """In-memory SQLite pool with an empty books table"""
    engine = _memory_engine()
    _create_books_table(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def broken_pool():
    """Pool whose database has no books table"""
    engine = _memory_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def create_books_table():
    return _create_books_table


@pytest.fixture
def count_books():
    """Row count of the books table behind an engine"""
    return _count_books


@pytest.fixture
def client(pool):
    with TestClient(create_app(pool)) as test_client:
        yield test_client


@pytest.fixture
def new_book_payload():
    return {
        "title": "The Rust Programming Language",
        "author": "Steve Klabnik",
        "price": 3999,
        "pages": 560,
        "is_published": True,
    }
