from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .core.config import MAX_CONNECTIONS
from .core.errors import StartupError


def create_pool(database_url: str, max_connections: int = MAX_CONNECTIONS) -> Engine:
    """Return a SQLAlchemy Engine holding at most `max_connections` connections.

    Borrowers beyond the ceiling wait for a connection to be returned, with no
    timeout. One connection is opened eagerly so that an unreachable database
    fails the process at startup instead of on the first request.
    """
    try:
        engine = create_engine(
            database_url,
            pool_size=max_connections,
            max_overflow=0,
            pool_timeout=None,
            pool_pre_ping=True,
        )
        with engine.connect():
            pass
    except (SQLAlchemyError, ImportError, ValueError) as exc:
        raise StartupError(f"Failed to create pool: {exc}") from exc

    logger.info("Database pool ready (max_connections={})", max_connections)
    return engine


def dispose_pool(pool: Engine) -> None:
    pool.dispose()
    logger.info("Database pool closed")


def get_pool(request: Request) -> Engine:
    """FastAPI dependency: the pool the application was built with."""
    return request.app.state.pool
