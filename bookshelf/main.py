import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from loguru import logger
from sqlalchemy.engine import Engine

from .api.routers import books
from .core.config import HOST, PORT, get_settings
from .core.errors import BookStorageError, DuplicateTitleError, StartupError
from .core.logging_setup import configure_logging
from .db_connection import create_pool, dispose_pool


async def duplicate_title_handler(request: Request, exc: DuplicateTitleError):
    logger.opt(exception=exc.__cause__).warning(
        "{} {} rejected by the database", request.method, request.url.path
    )
    return PlainTextResponse(str(exc), status_code=400)


async def storage_error_handler(request: Request, exc: BookStorageError):
    logger.opt(exception=exc).error("{} {} failed", request.method, request.url.path)
    return Response(status_code=500)


def create_app(pool: Engine) -> FastAPI:
    """Build the API around an already created pool.

    The pool is disposed when the application shuts down.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        dispose_pool(app.state.pool)

    app = FastAPI(
        title="Bookshelf API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.pool = pool

    @app.get("/health")
    def healthcheck():
        return {"status": "ok"}

    app.include_router(books.router, prefix="/books", tags=["books"])

    app.add_exception_handler(DuplicateTitleError, duplicate_title_handler)
    app.add_exception_handler(BookStorageError, storage_error_handler)
    return app


def run():
    """Console entry point: configure, connect, then serve until interrupted."""
    try:
        settings = get_settings()
    except StartupError as exc:
        configure_logging()
        logger.critical("Startup failed: {}", exc)
        sys.exit(1)

    configure_logging(settings["log_level"], settings["environment"])

    try:
        pool = create_pool(settings["database_url"])
    except StartupError as exc:
        logger.critical("Startup failed: {}", exc)
        sys.exit(1)

    logger.info("Serving on http://{}:{}", HOST, PORT)
    uvicorn.run(create_app(pool), host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()
