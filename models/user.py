"""
models/user.py
--------------
Domain model for registered user accounts.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    Represents one row of the users table.

    Attributes:
        id: Database primary key (None for new records).
        full_name: Display name entered at signup.
        email: Login email, stored lower-cased and unique.
        password_hash: Opaque hash produced by the caller.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
    """
    full_name: str
    email: str
    password_hash: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "User":
        """Build a User from a name-keyed database row."""
        return cls(
            id=row["id"],
            full_name=row["full_name"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def __str__(self) -> str:
        return f"#{self.id} {self.full_name} <{self.email}>"
