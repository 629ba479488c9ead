import os
from pathlib import Path

from dotenv import load_dotenv

from .errors import StartupError

HOST = "127.0.0.1"
PORT = 8080
MAX_CONNECTIONS = 5


def _normalize_database_url(url: str) -> str:
    # libpq-style URLs carry no driver; route them to psycopg2
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg2://" + url[len(prefix):]
    return url


def get_settings():
    """Read the process settings from the environment.

    A `.env` file in the working directory is loaded first; variables already
    present in the environment win. `DATABASE_URL` is required.
    """
    load_dotenv(Path.cwd() / ".env", override=False)

    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise StartupError("DATABASE_URL is not set")

    return {
        "environment": os.getenv("ENVIRONMENT", "local"),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "database_url": _normalize_database_url(database_url),
    }
