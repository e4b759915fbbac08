"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from spendsense.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "SPENDSENSE_DB_PATH"
DEFAULT_DATABASE_PATH = Path.home() / ".spendsense" / "spendsense.db"


def database_url_for(location: Optional[str] = None) -> str:
    """Turn a SQLite file path or a SQLAlchemy URL into a database URL.

    A location containing ``://`` is used as a URL unchanged, e.g.
    ``sqlite:///:memory:``. Anything else is a SQLite file path whose parent
    directory is created on demand. Without a location, SPENDSENSE_DB_PATH is
    consulted, then ~/.spendsense/spendsense.db is used.
    """
    if location is None:
        location = os.environ.get(DB_PATH_ENV)

    if location is not None and "://" in location:
        return location

    path = Path(location).expanduser() if location is not None else DEFAULT_DATABASE_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


def create_database(location: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a database from a file path or URL (see database_url_for)."""
    return SQLAlchemyDatabase(database_url_for(location))
