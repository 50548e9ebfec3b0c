"""
db/connection.py
----------------
Opens PostgreSQL connections for the application.

The entity mapper never opens or closes connections itself: callers borrow
one here and pass it to every mapper operation.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)


def connect(dsn: str = DATABASE_URL):
    """
    Open a new psycopg2 connection.

    Args:
        dsn: libpq connection string, DATABASE_URL by default.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    try:
        conn = psycopg2.connect(dsn)
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to connect to the database: {e}")
        raise
    logger.info("Database connection opened.")
    return conn


@contextmanager
def connection(dsn: str = DATABASE_URL) -> Iterator:
    """Yield a connection and close it on exit."""
    conn = connect(dsn)
    try:
        yield conn
    finally:
        conn.close()
        logger.info("Database connection closed.")
