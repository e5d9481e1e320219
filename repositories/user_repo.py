"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All SQL queries related to the `users` table live here.
"""

from typing import Optional

from db.gateway import Database
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, full_name, email, password_hash, created_at, updated_at"


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookups: trimmed, lower-cased."""
    return email.strip().lower()


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def __init__(self, database: Database):
        self.db = database

    # ── CREATE ────────────────────────────────────────────

    def create(self, full_name: str, email: str, password_hash: str) -> Optional[User]:
        """
        Insert a new user.

        Args:
            full_name: Display name.
            email: Login email (normalized to lower case).
            password_hash: Already-hashed password.

        Returns:
            The stored User, or None if the insert failed (e.g. the email
            is already registered). The reason is in ``self.db.get_error()``.
        """
        sql = "INSERT INTO users (full_name, email, password_hash) VALUES (%s, %s, %s);"
        if self.db.query(sql, (full_name.strip(), normalize_email(email), password_hash)) is None:
            logger.warning(f"Could not register user {normalize_email(email)}")
            return None
        user_id = int(self.db.last_insert_id())
        logger.info(f"Registered user #{user_id}")
        return self.get_by_id(user_id)

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Fetch a user by primary key. Returns None if not found."""
        row = self.db.single(f"SELECT {_COLUMNS} FROM users WHERE id = %s;", (user_id,))
        return User.from_row(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Fetch a user by login email. Returns None if not found."""
        row = self.db.single(
            f"SELECT {_COLUMNS} FROM users WHERE email = %(email)s;",
            {"email": normalize_email(email)},
        )
        return User.from_row(row) if row else None

    def list_all(self) -> list[User]:
        """All users, oldest first."""
        rows = self.db.result_set(f"SELECT {_COLUMNS} FROM users ORDER BY id;")
        return [User.from_row(r) for r in rows]

    def email_exists(self, email: str) -> bool:
        """True if an account is already registered under this email."""
        row = self.db.single(
            "SELECT 1 AS found FROM users WHERE email = %s;", (normalize_email(email),)
        )
        return row is not None

    def count(self) -> int:
        """Number of registered users (0 if the query fails)."""
        row = self.db.single("SELECT COUNT(*) AS total FROM users;")
        return int(row["total"]) if row else 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, user_id: int) -> bool:
        """
        Delete a user by primary key.

        Returns:
            True if a row was deleted.
        """
        if self.db.query("DELETE FROM users WHERE id = %s;", (user_id,)) is None:
            return False
        deleted = self.db.row_count() > 0
        if deleted:
            logger.info(f"Deleted user #{user_id}")
        return deleted
