"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
This is a manual provisioning step; the gateway never runs it on its own.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.errors import DatabaseError
from db.gateway import Database, open_database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS = (
    # Users table: one row per registered account
    """
    CREATE TABLE IF NOT EXISTS users (
        id              SERIAL PRIMARY KEY,
        full_name       VARCHAR(100) NOT NULL,
        email           VARCHAR(150) UNIQUE NOT NULL,
        password_hash   VARCHAR(255) NOT NULL,
        created_at      TIMESTAMPTZ DEFAULT NOW(),
        updated_at      TIMESTAMPTZ DEFAULT NOW()
    );
    """,
    # Keep updated_at current on every UPDATE
    """
    CREATE OR REPLACE FUNCTION touch_updated_at() RETURNS TRIGGER AS $$
    BEGIN
        NEW.updated_at = NOW();
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql;
    """,
    "DROP TRIGGER IF EXISTS users_touch_updated_at ON users;",
    """
    CREATE TRIGGER users_touch_updated_at
        BEFORE UPDATE ON users
        FOR EACH ROW EXECUTE FUNCTION touch_updated_at();
    """,
)

SCHEMA_SQL = "\n".join(statement.strip() for statement in SCHEMA_STATEMENTS)


def create_tables(database: Database) -> None:
    """
    Execute the schema statements through the gateway.
    Safe to call multiple times.

    Raises:
        DatabaseError: If any statement fails.
    """
    for statement in SCHEMA_STATEMENTS:
        outcome = database.execute(statement)
        if not outcome.ok:
            logger.error(f"Failed to initialize schema: {outcome.error}")
            raise DatabaseError(f"Failed to initialize schema: {outcome.error}")
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    with open_database() as db:
        create_tables(db)
    print("Database schema created successfully.")
