"""Database module for RentalHub Core.

Core encapsulates a single SQLite connection and exposes entity operations
through properties:

    with get_core(settings.database_path) as core:
        core.users.insert(...)
    # committed and closed here; rolled back instead if the block raised

ARCHITECTURE:
- Core owns its connection (no Flask g dependency, no module-level handle)
- The database path is passed in explicitly, so tests can point at a temp file
- Each entity type gets an encapsulated operations class
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"

if TYPE_CHECKING:
    from .users import UserOperations


class Core:
    """
    Database Core with entity operations.

    Must be used as a context manager. On exit the transaction is committed
    (or rolled back if an exception occurred) and the connection is closed.
    """

    def __init__(self, connection: sqlite3.Connection):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = connection
        self._user_ops = None

    @property
    def users(self) -> "UserOperations":
        """User table operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._user_ops is None:
            from .users import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    def __enter__(self) -> "Core":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()


def _create_connection(database_path: str) -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
    """
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def get_core(database_path: str) -> Core:
    """
    Get a database Core for the given database file.

    Examples:
        >>> with get_core("./data/rentalhub.db") as core:
        ...     record = core.users.get_by_email("a@b.com")
    """
    return Core(_create_connection(database_path))


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db(database_path: str) -> None:
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        with open(SCHEMA_PATH, "r") as f:
            schema_sql = f.read()
        conn.executescript(schema_sql)
        conn.commit()
        logger.info(f"Applied schema to {db_path}")
    finally:
        conn.close()

