"""Shared pytest fixtures: an in-memory SQLite store holding the example tables."""

import sqlite3
from typing import Iterator

import pytest

from models.comment import Comment  # noqa: F401  (registers the type)
from models.user import User  # noqa: F401  (registers the type)

SQLITE_SCHEMA = """
CREATE TABLE users (
    username        TEXT PRIMARY KEY,
    full_name       TEXT,
    password        TEXT,
    email           TEXT UNIQUE,
    is_admin        INTEGER NOT NULL DEFAULT 0,
    remember_token  TEXT DEFAULT ''
);

CREATE TABLE comments (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    author          TEXT,
    content         TEXT,
    article         INTEGER,
    created_at      TEXT
);
"""


@pytest.fixture()
def conn() -> Iterator[sqlite3.Connection]:
    """Fresh in-memory database with the users and comments tables."""
    connection = sqlite3.connect(":memory:")
    connection.executescript(SQLITE_SCHEMA)
    yield connection
    connection.close()


@pytest.fixture()
def statements(conn: sqlite3.Connection) -> list[str]:
    """Every SQL statement the connection executes from now on."""
    executed: list[str] = []
    conn.set_trace_callback(executed.append)
    return executed


@pytest.fixture()
def jdoe() -> User:
    return User(
        username="jdoe",
        fullName="John Doe",
        password="secret",
        email="jdoe@domain.com",
    )
