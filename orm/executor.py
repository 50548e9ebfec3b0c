"""
orm/executor.py
---------------
Runs one statement inside its own transaction on a caller-owned DB-API
connection: execute, commit on success, rollback on failure.

Driver exceptions are mapped to result failures:

    IntegrityError, DataError          -> CONSTRAINT_VIOLATION
    OperationalError                   -> CONNECTION_ERROR (STATEMENT_ERROR on
                                          SQLite, which raises it for bad SQL)
    other DatabaseError                -> STATEMENT_ERROR
    ProgrammingError, InterfaceError,
    NotSupportedError                  -> UnrecoverableDriverError (raised)

Exceptions that do not come from the driver are re-raised after rollback.
"""

import sys
from dataclasses import dataclass, field
from typing import Any, Optional

from orm.dialect import dialect_for
from orm.errors import UnrecoverableDriverError
from orm.query import Statement
from orm.result import Err, Failure, FailureKind, Ok, Result
from utils.logger import get_logger

logger = get_logger(__name__)

_FATAL = ("ProgrammingError", "InterfaceError", "NotSupportedError")
_SOFT = (
    ("IntegrityError", FailureKind.CONSTRAINT_VIOLATION),
    ("DataError", FailureKind.CONSTRAINT_VIOLATION),
    ("OperationalError", FailureKind.CONNECTION_ERROR),
    ("DatabaseError", FailureKind.STATEMENT_ERROR),
)


@dataclass
class Execution:
    """
    What a successful statement produced.

    Attributes:
        rows: Result rows as column -> value dicts (empty for DML).
        rowcount: Rows affected, as reported by the driver (-1 if unknown).
        lastrowid: Key of the last inserted row when the driver reports one.
    """
    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1
    lastrowid: Optional[Any] = None


def _driver_class(conn: Any, name: str) -> Optional[type]:
    """DB-API exception class `name`, from the connection or its driver module."""
    cls = getattr(conn, name, None)
    if isinstance(cls, type):
        return cls
    for base in type(conn).__mro__:
        module = sys.modules.get(base.__module__.split(".")[0])
        cls = getattr(module, name, None)
        if isinstance(cls, type):
            return cls
    return None


def classify(conn: Any, exc: BaseException, dialect=None) -> Optional[FailureKind]:
    """
    Map a driver exception to a failure kind.

    sqlite3 raises OperationalError for syntax errors and missing tables as
    well as for locked databases, so on SQLite it maps to STATEMENT_ERROR.

    Returns:
        The kind for recoverable failures, None for fatal driver faults.

    Raises:
        TypeError: If `exc` is not a DB-API error of the connection's driver.
    """
    for name in _FATAL:
        cls = _driver_class(conn, name)
        if cls is not None and isinstance(exc, cls):
            return None
    dialect = dialect or dialect_for(conn)
    for name, kind in _SOFT:
        cls = _driver_class(conn, name)
        if cls is not None and isinstance(exc, cls):
            if kind is FailureKind.CONNECTION_ERROR and dialect.name == "sqlite":
                return FailureKind.STATEMENT_ERROR
            return kind
    raise TypeError(f"{type(exc).__name__} is not a driver error")


def _driver_error_types(conn: Any) -> tuple[type, ...]:
    error = _driver_class(conn, "Error")
    return (error,) if error is not None else ()


def _rollback(conn: Any) -> None:
    try:
        conn.rollback()
        logger.debug("ROLLBACK")
    except _driver_error_types(conn) as e:
        logger.error(f"Rollback failed: {e}")


def execute(conn: Any, statement: Statement, dialect=None) -> Result[Execution]:
    """
    Execute `statement` in a one-statement transaction.

    Args:
        conn: Caller-owned DB-API connection. It is never closed here.
        statement: Canonical statement from orm.query.
        dialect: Overrides the dialect detected from the connection.

    Returns:
        Ok(Execution) on commit, Err(Failure) after a rollback.

    Raises:
        UnrecoverableDriverError: On faults that make the statement unusable.
    """
    dialect = dialect or dialect_for(conn)
    sql = dialect.render(statement.sql)
    driver_errors = _driver_error_types(conn)
    logger.debug(f"BEGIN; {sql} -- {statement.params}")

    try:
        cursor = conn.cursor()
    except driver_errors as e:
        raise UnrecoverableDriverError(f"Could not open a cursor: {e}", cause=e) from e

    try:
        cursor.execute(sql, statement.params)
        execution = Execution(rowcount=getattr(cursor, "rowcount", -1))
        if cursor.description is not None:
            names = [column[0] for column in cursor.description]
            execution.rows = [dict(zip(names, row)) for row in cursor.fetchall()]
        if statement.returns_key and execution.rows:
            execution.lastrowid = next(iter(execution.rows[0].values()))
        else:
            execution.lastrowid = getattr(cursor, "lastrowid", None)
        conn.commit()
        logger.debug("COMMIT")
        return Ok(execution)
    except driver_errors as e:
        _rollback(conn)
        kind = classify(conn, e, dialect)
        if kind is None:
            logger.error(f"Unrecoverable driver fault on {sql!r}: {e}")
            raise UnrecoverableDriverError(f"Statement failed: {e}", cause=e) from e
        logger.error(f"Statement failed ({kind.value}): {e}")
        return Err(Failure(kind, str(e), cause=e))
    except Exception:
        _rollback(conn)
        raise
    finally:
        cursor.close()
