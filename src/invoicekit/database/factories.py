"""Database factory functions."""

import logging
import os
from pathlib import Path
from typing import Optional

from invoicekit.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "INVOICEKIT_DB_PATH"
SQL_ECHO_ENV = "INVOICEKIT_SQL_ECHO"


def default_database_path() -> Path:
    """Return ~/.invoicekit/invoicekit.db, creating the directory."""
    db_dir = Path.home() / ".invoicekit"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "invoicekit.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file: explicit path, then INVOICEKIT_DB_PATH, then the default."""
    database_path = database_path or os.environ.get(DB_PATH_ENV)
    if not database_path:
        return default_database_path()
    return Path(database_path).expanduser()


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            INVOICEKIT_DB_PATH environment variable, then defaults to
            ~/.invoicekit/invoicekit.db

    Setting INVOICEKIT_SQL_ECHO=1 logs every SQL statement.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    echo = os.environ.get(SQL_ECHO_ENV, "").lower() in ("1", "true", "yes")
    logger.debug("Opening SQLite database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}", echo=echo)
