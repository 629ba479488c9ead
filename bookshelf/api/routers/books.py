from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.engine import Engine

from ...crud import books as crud
from ...db_connection import get_pool
from ...schemas.book import Book, NewBook

router = APIRouter()


@router.get("", response_model=list[Book])
def list_books(pool: Engine = Depends(get_pool)):
    books = crud.list_books(pool)
    logger.debug("Listed {} books", len(books))
    return books


@router.post("", response_model=Book, status_code=201)
def create_book(payload: NewBook, pool: Engine = Depends(get_pool)):
    book = crud.insert_book(pool, payload)
    logger.info("Created book {} ({!r})", book.id, book.title)
    return book
