"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "php_website_basic")
DB_USER: str = os.getenv("DB_USER", "")
DB_PASS: str = os.getenv("DB_PASS", "")
DB_CHARSET: str = os.getenv("DB_CHARSET", "UTF8")
DATABASE_URL: str = os.getenv("DATABASE_URL", "")

# ── Deadlines ─────────────────────────────────────────────
DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "5"))
DB_STATEMENT_TIMEOUT_MS: int = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "0"))

# ── Pool ──────────────────────────────────────────────────
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection settings for one gateway. Immutable once built.

    Attributes:
        host: Server hostname.
        database: Database name.
        user: Login role.
        password: Login password (hidden from repr).
        charset: Client encoding requested for the session.
        port: Server port.
        connect_timeout: Seconds to wait for the connection before giving up.
        statement_timeout_ms: Server-side deadline per statement, 0 disables it.
        dsn: Full libpq connection string; when set it takes precedence
            over the individual fields it names.
    """
    host: str = "localhost"
    database: str = ""
    user: str = ""
    password: str = field(default="", repr=False)
    charset: str = "UTF8"
    port: int = 5432
    connect_timeout: int = 5
    statement_timeout_ms: int = 0
    dsn: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Build the configuration from the process environment / .env file."""
        return cls(
            host=DB_HOST,
            database=DB_NAME,
            user=DB_USER,
            password=DB_PASS,
            charset=DB_CHARSET,
            port=DB_PORT,
            connect_timeout=DB_CONNECT_TIMEOUT,
            statement_timeout_ms=DB_STATEMENT_TIMEOUT_MS,
            dsn=DATABASE_URL or None,
        )

    def connect_kwargs(self) -> dict:
        """Keyword arguments for ``psycopg2.connect`` (session settings excluded)."""
        kwargs: dict = {}
        if self.dsn:
            kwargs["dsn"] = self.dsn
        else:
            kwargs["host"] = self.host
            kwargs["port"] = self.port
            kwargs["dbname"] = self.database
            if self.user:
                kwargs["user"] = self.user
            if self.password:
                kwargs["password"] = self.password
        kwargs["client_encoding"] = self.charset
        kwargs["connect_timeout"] = self.connect_timeout
        if self.statement_timeout_ms > 0:
            kwargs["options"] = f"-c statement_timeout={self.statement_timeout_ms}"
        return kwargs
