"""
orm/dialect.py
--------------
Driver-specific SQL details.

Statements are synthesized with canonical ``:name`` placeholders. A dialect
renders them into its driver's paramstyle and decides how a missing
primary key is handed to the store so that it generates one.

    SQLiteDialect      ``:name``      (sqlite3, paramstyle "named")
    PostgreSQLDialect  ``%(name)s``   (psycopg2, paramstyle "pyformat")
"""

import re
from typing import Any

from config import DB_DIALECT
from utils.logger import get_logger

logger = get_logger(__name__)

# ``:name`` but not a PostgreSQL ``::type`` cast.
_PLACEHOLDER = re.compile(r"(?<![:\w]):([A-Za-z_][A-Za-z0-9_]*)")


def placeholder_names(sql: str) -> list[str]:
    """Names of the ``:name`` placeholders in `sql`, in order of appearance."""
    return _PLACEHOLDER.findall(sql)


class SQLiteDialect:
    """sqlite3 accepts ``:name`` as-is; generated keys come from ``cursor.lastrowid``."""

    name = "sqlite"
    supports_returning = False

    def render(self, sql: str) -> str:
        return sql

    def generated_key_value(self, column: str) -> str:
        """SQL placed in the key slot of an INSERT when the store assigns the key."""
        return f":{column}"


class PostgreSQLDialect:
    """psycopg2 uses ``%(name)s``; generated keys come back through ``RETURNING``."""

    name = "postgresql"
    supports_returning = True

    def render(self, sql: str) -> str:
        escaped = sql.replace("%", "%%")
        return _PLACEHOLDER.sub(r"%(\1)s", escaped)

    def generated_key_value(self, column: str) -> str:
        # An explicit NULL would violate NOT NULL on SERIAL columns.
        return "DEFAULT"


_DIALECTS = {
    "sqlite": SQLiteDialect,
    "sqlite3": SQLiteDialect,
    "postgresql": PostgreSQLDialect,
    "postgres": PostgreSQLDialect,
    "psycopg2": PostgreSQLDialect,
}


def get_dialect(name: str):
    """
    Dialect instance by name.

    Raises:
        ValueError: For an unknown dialect name.
    """
    try:
        return _DIALECTS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown SQL dialect: {name!r}") from None


def dialect_for(conn: Any):
    """
    Pick the dialect matching the connection's driver module, falling back
    to the configured DB_DIALECT for drivers that cannot be recognised.

    Subclasses of a driver's connection class (sqlite3 ``factory=``,
    psycopg2 ``connection_factory=``) resolve to the driver they extend.
    """
    for cls in type(conn).__mro__:
        driver = cls.__module__.split(".")[0].lstrip("_")
        if driver in _DIALECTS:
            return _DIALECTS[driver]()
    logger.debug(
        f"Unrecognised driver {type(conn).__module__!r}, using dialect {DB_DIALECT!r}"
    )
    return get_dialect(DB_DIALECT)
