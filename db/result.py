"""
db/result.py
------------
Statement outcomes returned by `Database.execute`.
Success and failure are distinct types, so an empty result is never
mistaken for an error.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class QueryResult:
    """
    A statement that executed successfully.

    Attributes:
        rows: Name-keyed rows (empty for statements without a result set).
        rowcount: Rows affected or selected, as reported by the driver.
    """
    rows: list = field(default_factory=list)
    rowcount: int = 0

    ok = True

    def first(self) -> Optional[dict]:
        """Returns the first row, or None when there are no rows."""
        return self.rows[0] if self.rows else None

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class QueryFailure:
    """A statement the driver rejected; `error` holds its message."""
    error: str

    ok = False

    def __bool__(self) -> bool:
        return False


Outcome = Union[QueryResult, QueryFailure]
