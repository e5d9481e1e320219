"""
main.py
-------
Entry point: connectivity check for the data access gateway.

Responsibilities:
    - Build the connection configuration from the environment.
    - Open the gateway, failing fast if the database is unreachable.
    - Report the number of registered users and release the connection.
"""

import sys

from config import DatabaseConfig
from db.errors import DatabaseConnectionError
from db.gateway import open_database
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)

FAILURE_MESSAGE = "Database connection failed. Please try again later."


def main() -> int:
    """Run the check; returns the process exit status."""
    config = DatabaseConfig.from_env()
    logger.info(f"Connecting to {config.host}:{config.port}/{config.database}...")
    try:
        database = open_database(config, fail_fast=True)
    except DatabaseConnectionError as e:
        logger.error(f"Startup aborted: {e.cause}")
        print(FAILURE_MESSAGE, file=sys.stderr)
        return 1

    with database:
        users = UserRepository(database)
        logger.info(f"Database ready: {users.count()} registered user(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
