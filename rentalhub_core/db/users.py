"""Credential store: user table operations.

IMPORT CONVENTION:
- Core accesses UserOperations through the core.users property
- Application code talks to UserStore, which owns the database path and
  translates sqlite3 errors into RentalHub exceptions

ID GENERATION POLICY:
User IDs are auto-generated UUIDs; callers never supply one.
"""

import logging
import sqlite3
from contextlib import contextmanager

from ..auth.schemas import UserRecord
from ..exceptions import ConflictError, DatabaseError
from ..utils import isodatetime, uid
from . import get_core

logger = logging.getLogger(__name__)

_PUBLIC_COLUMNS = "id, email, name, created_at"


def _row_to_record(row: sqlite3.Row, include_password_hash: bool = False) -> UserRecord:
    return UserRecord(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        created_at=isodatetime.to_datetime(row["created_at"]),
        password_hash=row["password_hash"] if include_password_hash else None,
    )


class UserOperations:
    """Low-level user table operations on an open connection."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def insert(self, email: str, password_hash: str, name: str | None = None) -> UserRecord:
        """Insert a user row with an auto-generated UUID.

        Raises:
            sqlite3.IntegrityError: If the email is already registered
        """
        user_id = uid.generate_uuid()
        created_at = isodatetime.now()

        self._conn.execute(
            """INSERT INTO users (id, email, password_hash, name, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, email, password_hash, name, created_at)
        )

        return UserRecord(
            id=user_id,
            email=email,
            name=name,
            created_at=isodatetime.to_datetime(created_at),
        )

    def get_by_email(self, email: str, include_password_hash: bool = False) -> UserRecord | None:
        """Look up a user by email (case-insensitive)."""
        columns = f"{_PUBLIC_COLUMNS}, password_hash" if include_password_hash else _PUBLIC_COLUMNS
        row = self._conn.execute(
            f"SELECT {columns} FROM users WHERE email = ?",
            (email,)
        ).fetchone()
        if row is None:
            return None
        return _row_to_record(row, include_password_hash)

    def get_by_id(self, user_id: str) -> UserRecord | None:
        """Look up a user by ID. The password hash is never selected."""
        row = self._conn.execute(
            f"SELECT {_PUBLIC_COLUMNS} FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()
        if row is None:
            return None
        return _row_to_record(row)

    def count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]


class UserStore:
    """Persistent email -> user record mapping.

    Each call opens its own connection, so a single instance can be shared
    across request threads.
    """

    def __init__(self, database_path: str):
        self._database_path = database_path

    @contextmanager
    def _core(self):
        try:
            with get_core(self._database_path) as core:
                yield core
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            logger.error(f"Credential store failure: {e}")
            raise DatabaseError(f"Database error: {e}") from e

    def create(self, email: str, password_hash: str, name: str | None = None) -> UserRecord:
        """Create a user record.

        Raises:
            ConflictError: If the email is already registered
            DatabaseError: If the store is unreachable
        """
        try:
            with self._core() as core:
                record = core.users.insert(email, password_hash, name)
        except sqlite3.IntegrityError as e:
            raise ConflictError(
                "User already exists with this email",
                {"email": email}
            ) from e
        logger.info(f"User created with ID {record.id}")
        return record

    def find_by_email(self, email: str, include_password_hash: bool = False) -> UserRecord | None:
        with self._core() as core:
            return core.users.get_by_email(email, include_password_hash)

    def get_by_id(self, user_id: str) -> UserRecord | None:
        with self._core() as core:
            return core.users.get_by_id(user_id)

    def count(self) -> int:
        with self._core() as core:
            return core.users.count()
