"""Tests for the credential store (Core, UserOperations, UserStore)."""

import sqlite3

import pytest

from rentalhub_core.db import get_core, init_db
from rentalhub_core.db.users import UserStore
from rentalhub_core.exceptions import ConflictError, DatabaseError

HASH = "$2b$04$abcdefghijklmnopqrstuuW2vUaS6nF7oZ1rQ7gG7n6n0v0yYH6G."


class TestInitDb:
    """Tests for schema initialization."""

    def test_creates_users_table(self, tmp_path):
        db_path = str(tmp_path / "nested" / "rentalhub.db")
        init_db(db_path)

        conn = sqlite3.connect(db_path)
        try:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='users'"
            ).fetchone()
        finally:
            conn.close()
        assert row is not None

    def test_is_idempotent(self, tmp_path):
        db_path = str(tmp_path / "rentalhub.db")
        init_db(db_path)
        store = UserStore(db_path)
        store.create("a@b.com", HASH)

        init_db(db_path)
        assert store.count() == 1


class TestCore:
    """Tests for Core transaction handling."""

    def test_commits_on_success(self, store, test_settings):
        with get_core(test_settings.database_path) as core:
            core.users.insert("a@b.com", HASH)

        assert store.count() == 1

    def test_rolls_back_on_error(self, store, test_settings):
        with pytest.raises(RuntimeError):
            with get_core(test_settings.database_path) as core:
                core.users.insert("a@b.com", HASH)
                raise RuntimeError("boom")

        assert store.count() == 0


class TestUserStore:
    """Tests for UserStore operations."""

    def test_create_returns_record(self, store):
        record = store.create("a@b.com", HASH, "Ada")

        assert len(record.id) == 36
        assert record.email == "a@b.com"
        assert record.name == "Ada"
        assert record.created_at.tzinfo is not None
        assert record.password_hash is None

    def test_create_generates_unique_ids(self, store):
        first = store.create("a@b.com", HASH)
        second = store.create("c@d.com", HASH)
        assert first.id != second.id

    def test_duplicate_email_raises_conflict(self, store):
        store.create("a@b.com", HASH)

        with pytest.raises(ConflictError):
            store.create("a@b.com", HASH)
        assert store.count() == 1

    def test_duplicate_email_different_case_raises_conflict(self, store):
        """The NOCASE constraint holds even if a caller skips normalization."""
        store.create("a@b.com", HASH)

        with pytest.raises(ConflictError):
            store.create("A@B.COM", HASH)

    def test_find_by_email_excludes_hash_by_default(self, store):
        store.create("a@b.com", HASH)

        record = store.find_by_email("a@b.com")
        assert record is not None
        assert record.password_hash is None

    def test_find_by_email_with_hash(self, store):
        store.create("a@b.com", HASH)

        record = store.find_by_email("a@b.com", include_password_hash=True)
        assert record.password_hash == HASH

    def test_find_by_email_case_insensitive(self, store):
        store.create("a@b.com", HASH)
        assert store.find_by_email("A@b.COM") is not None

    def test_find_by_email_missing(self, store):
        assert store.find_by_email("nobody@b.com") is None

    def test_get_by_id(self, store):
        created = store.create("a@b.com", HASH)

        found = store.get_by_id(created.id)
        assert found == created
        assert found.password_hash is None

    def test_get_by_id_missing(self, store):
        assert store.get_by_id("00000000-0000-4000-8000-000000000000") is None

    def test_unreachable_database_raises_database_error(self, tmp_path):
        """A store whose schema was never applied fails as a DatabaseError."""
        store = UserStore(str(tmp_path / "empty.db"))

        with pytest.raises(DatabaseError) as exc_info:
            store.find_by_email("a@b.com")
        assert "no such table" in exc_info.value.message
