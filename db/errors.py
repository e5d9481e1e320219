"""
db/errors.py
------------
Exceptions raised by the database layer.
Statement failures are absorbed by the gateway; these cover the cases
that must surface to the caller.
"""

from typing import Optional


class DatabaseError(RuntimeError):
    """Base class for all database layer errors."""


class DatabaseConnectionError(DatabaseError):
    """The connection (or pool) could not be established."""

    def __init__(self, message: str, cause: Optional[str] = None):
        super().__init__(message)
        self.cause = cause


class NotConnectedError(DatabaseError):
    """An operation needs a live connection but the gateway has none."""
