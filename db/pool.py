"""
db/pool.py
----------
Bounded pool of PostgreSQL connections for concurrent callers.
Uses psycopg2's ThreadedConnectionPool; each checkout hands out a
`Database` gateway with exclusive use of one connection.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import extras, pool

from config import DB_POOL_MAX, DB_POOL_MIN, DatabaseConfig
from db.errors import DatabaseConnectionError, DatabaseError
from db.gateway import Database
from utils.logger import get_logger, one_line

logger = get_logger(__name__)


class GatewayPool:
    """Checkout/checkin of gateways over a fixed-size connection pool."""

    def __init__(
        self,
        config: Optional[DatabaseConfig] = None,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
    ):
        """
        Initialize the connection pool.

        Args:
            config: Connection settings; read from the environment if omitted.
            min_conn: Minimum number of connections to keep open.
            max_conn: Maximum number of connections allowed.

        Raises:
            DatabaseConnectionError: If the database is unreachable.
        """
        self.config = config or DatabaseConfig.from_env()
        try:
            self._pool: Optional[pool.ThreadedConnectionPool] = pool.ThreadedConnectionPool(
                min_conn,
                max_conn,
                cursor_factory=extras.RealDictCursor,
                **self.config.connect_kwargs(),
            )
        except psycopg2.Error as e:
            message = one_line(e)
            logger.error(f"Database Connection Error: {message}")
            raise DatabaseConnectionError("Failed to initialize database pool", cause=message) from e
        logger.info(f"Database connection pool initialized ({min_conn}-{max_conn} connections).")

    @contextmanager
    def checkout(self) -> Iterator[Database]:
        """
        Borrow a connection for the duration of the ``with`` block.

        Raises:
            DatabaseError: The pool is closed or every connection is in use.
        """
        if self._pool is None:
            raise DatabaseError("Database pool is closed.")
        try:
            conn = self._pool.getconn()
        except pool.PoolError as e:
            raise DatabaseError(f"No database connection available: {e}") from e
        if not conn.autocommit:
            conn.autocommit = True
        database = Database(self.config, connection=conn)
        try:
            yield database
        finally:
            database.close()
            if self._pool is not None:
                self._pool.putconn(conn, close=bool(conn.closed))
            else:
                conn.close()

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "GatewayPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
