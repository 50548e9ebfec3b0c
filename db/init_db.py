"""
db/init_db.py
-------------
Creates the tables of the example entities if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: keyed by the caller-chosen username
CREATE TABLE IF NOT EXISTS users (
    username        VARCHAR(50) PRIMARY KEY,
    full_name       VARCHAR(100),
    password        VARCHAR(255),
    email           VARCHAR(255) UNIQUE,
    is_admin        BOOLEAN NOT NULL DEFAULT FALSE,
    remember_token  VARCHAR(100) DEFAULT ''
);

-- Comments table: id generated by the store
CREATE TABLE IF NOT EXISTS comments (
    id              SERIAL PRIMARY KEY,
    author          VARCHAR(50) REFERENCES users(username) ON DELETE CASCADE,
    content         TEXT,
    article         INT,
    created_at      VARCHAR(32)
);
"""


def create_tables(conn) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        conn: An open psycopg2 connection.
    """
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import connection
    with connection() as conn:
        create_tables(conn)
    print("Database schema created successfully.")
