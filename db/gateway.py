"""
db/gateway.py
-------------
The data access gateway: owns one PostgreSQL connection and exposes
parameterized query primitives on top of it.

Every value reaches the server through psycopg2's parameter binding
(``%s`` / ``%(name)s`` placeholders); the gateway never formats values
into SQL text itself.

A gateway is not safe for concurrent use: statements and their results
share one connection and one current cursor. Use one gateway per
worker/request, or check gateways out of a `db.pool.GatewayPool`.
"""

import re
from typing import Any, Mapping, Optional, Sequence, Union

import psycopg2
from psycopg2 import errors, extras

from config import DatabaseConfig
from db.errors import DatabaseConnectionError, NotConnectedError
from db.result import Outcome, QueryFailure, QueryResult
from utils.logger import get_logger, one_line

logger = get_logger(__name__)

Params = Optional[Union[Sequence[Any], Mapping[str, Any]]]

# Placeholder/argument mismatches and malformed `%` sequences are reported
# by psycopg2 as plain Python errors while it binds the parameters.
STATEMENT_ERRORS = (psycopg2.Error, TypeError, IndexError, KeyError, ValueError)
_ABSORBED = STATEMENT_ERRORS + (NotConnectedError,)

_INSERT = re.compile(r"^\s*insert\b", re.IGNORECASE)


def connect(config: DatabaseConfig):
    """
    Open a connection with the session settings every gateway relies on.

    Rows come back as dicts (RealDictCursor) and every statement runs in
    autocommit mode. Driver failures raise ``psycopg2.Error``.
    """
    conn = psycopg2.connect(
        cursor_factory=extras.RealDictCursor,
        **config.connect_kwargs(),
    )
    conn.autocommit = True
    return conn


class Database:
    """
    Gateway to one database connection.

    The instance is either *connected* (handle present, no connection
    error) or *failed* (no handle, connection error recorded). The state is
    decided once, during construction, and never changes afterwards except
    through `close()`.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None, connection=None):
        """
        Args:
            config: Connection settings; read from the environment if omitted.
            connection: An already-open connection to adopt (e.g. from a pool).
                The gateway does not close adopted connections.
        """
        self.config = config or DatabaseConfig.from_env()
        self._conn = None
        self._owns_connection = connection is None
        self._error: Optional[str] = None
        self._query_error: Optional[str] = None
        self._cursor = None
        self._rowcount = 0
        self._last_insert_id = "0"

        if connection is not None:
            self._conn = connection
            return
        try:
            self._conn = connect(self.config)
        except psycopg2.Error as e:
            self._error = one_line(e)
            logger.error(f"Database Connection Error: {self._error}")

    # ── State ─────────────────────────────────────────────

    @property
    def is_connected(self) -> bool:
        """True while the gateway holds a live connection handle."""
        return self._conn is not None

    def get_connection(self):
        """Returns the raw psycopg2 connection, or None."""
        return self._conn

    def get_error(self) -> Optional[str]:
        """
        The connection failure of a failed gateway; otherwise the message
        of the most recent statement failure, or None if the last statement
        succeeded.
        """
        return self._error or self._query_error

    # ── Statements ────────────────────────────────────────

    def _run(self, sql: str, params: Params):
        """Execute one statement on a fresh cursor; driver errors propagate."""
        if self._conn is None:
            raise NotConnectedError(self._error or "Database connection is closed")
        self._release_cursor()
        cursor = self._conn.cursor()
        try:
            cursor.execute(sql, params)
        except BaseException:
            cursor.close()
            raise
        self._cursor = cursor
        self._rowcount = cursor.rowcount
        self._query_error = None
        if _INSERT.match(sql):
            self._last_insert_id = self._read_lastval()
        return cursor

    def _read_lastval(self) -> str:
        """Session sequence value after a successful insert; "0" if none was generated."""
        try:
            with self._conn.cursor() as cur:
                cur.execute("SELECT lastval() AS id;")
                row = cur.fetchone()
        except errors.ObjectNotInPrerequisiteState:
            return "0"
        return str(row["id"])

    def _record_failure(self, error: Exception) -> str:
        message = one_line(error)
        self._query_error = message
        self._rowcount = 0
        logger.error(f"Query Error: {message}")
        return message

    def query(self, sql: str, params: Params = None):
        """
        Prepare, bind and execute a statement.

        Args:
            sql: SQL text with ``%s`` or ``%(name)s`` placeholders.
            params: Sequence or mapping of values to bind.

        Returns:
            The executed cursor, or None if the statement failed. Failures
            are logged and available through `get_error()`.
        """
        try:
            return self._run(sql, params)
        except _ABSORBED as e:
            self._record_failure(e)
            return None

    def single(self, sql: str, params: Params = None) -> Optional[dict]:
        """
        Fetch the first row of a statement's result.

        None means either "no matching row" or "the statement failed".
        Callers that need to tell them apart use `execute()` or `get_error()`.
        """
        cursor = self.query(sql, params)
        if cursor is None or cursor.description is None:
            return None
        row = cursor.fetchone()
        return dict(row) if row is not None else None

    def result_set(self, sql: str, params: Params = None) -> list[dict]:
        """
        Fetch every row of a statement's result.

        Returns an empty list for zero rows, for statements without a
        result set, and for failed statements.
        """
        cursor = self.query(sql, params)
        if cursor is None or cursor.description is None:
            return []
        return [dict(row) for row in cursor.fetchall()]

    def execute(self, sql: str, params: Params = None) -> Outcome:
        """
        Run a statement and report the outcome explicitly.

        Returns:
            QueryResult with the rows (possibly none) on success,
            QueryFailure with the driver message otherwise.
        """
        try:
            cursor = self._run(sql, params)
            rows = [dict(row) for row in cursor.fetchall()] if cursor.description else []
        except _ABSORBED as e:
            return QueryFailure(self._record_failure(e))
        return QueryResult(rows=rows, rowcount=cursor.rowcount)

    # ── Connection-level accessors ────────────────────────

    def _require_connection(self):
        if self._conn is None:
            raise NotConnectedError(self._error or "Database connection is closed")
        return self._conn

    def row_count(self) -> int:
        """
        Rows affected or selected by the most recent statement (0 after a
        failed one).

        Raises:
            NotConnectedError: The gateway has no connection.
        """
        self._require_connection()
        return self._rowcount

    def last_insert_id(self) -> str:
        """
        The sequence value generated by the most recent successful INSERT
        run through this gateway, as a string; "0" until one succeeds.
        Failed inserts leave it unchanged.

        Raises:
            NotConnectedError: The gateway has no connection.
        """
        self._require_connection()
        return self._last_insert_id

    # ── Lifecycle ─────────────────────────────────────────

    def _release_cursor(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    def close(self) -> None:
        """Release the cursor and, unless adopted, close the connection."""
        if self._conn is None:
            return
        self._release_cursor()
        if self._owns_connection:
            self._conn.close()
            logger.info("Database connection closed.")
        self._conn = None

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_database(config: Optional[DatabaseConfig] = None, fail_fast: bool = True) -> Database:
    """
    Construct a gateway and decide what a connection failure means.

    Args:
        config: Connection settings; read from the environment if omitted.
        fail_fast: Raise on a failed connection instead of returning the
            failed gateway.

    Raises:
        DatabaseConnectionError: The connection failed and ``fail_fast`` is set.
    """
    database = Database(config)
    if fail_fast and not database.is_connected:
        raise DatabaseConnectionError("Database connection failed", cause=database.get_error())
    return database
