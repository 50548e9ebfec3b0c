"""Tests for the one-statement transaction runner."""

import sqlite3

import pytest

from orm.dialect import PostgreSQLDialect
from orm.errors import UnrecoverableDriverError
from orm.executor import classify, execute
from orm.query import Statement
from orm.result import FailureKind


class RecordingCursor:
    """Cursor double that answers like psycopg2 for ``INSERT ... RETURNING``."""

    description = [("id", None, None, None, None, None, None)]
    rowcount = 1
    lastrowid = 0

    def __init__(self, log):
        self.log = log

    def execute(self, sql, params):
        self.log.append(("execute", sql, params))

    def fetchall(self):
        return [(42,)]

    def close(self):
        self.log.append(("close",))


class RecordingConnection:
    def __init__(self):
        self.log = []

    def cursor(self):
        return RecordingCursor(self.log)

    def commit(self):
        self.log.append(("commit",))

    def rollback(self):
        self.log.append(("rollback",))


def test_select_returns_rows_as_dicts(conn):
    conn.execute("INSERT INTO users (username, full_name) VALUES ('jdoe', 'John Doe')")
    conn.commit()
    result = execute(conn, Statement("SELECT username, full_name FROM users"))
    assert result
    assert result.value.rows == [{"username": "jdoe", "full_name": "John Doe"}]


def test_insert_reports_lastrowid(conn):
    result = execute(
        conn,
        Statement("INSERT INTO comments (id, content) VALUES (:id, :content)", {"id": None, "content": "x"}),
    )
    assert result.value.lastrowid == 1
    assert result.value.rowcount == 1


def test_integrity_error_rolls_back(conn):
    statement = Statement("INSERT INTO users (username) VALUES (:username)", {"username": "jdoe"})
    assert execute(conn, statement)
    result = execute(conn, statement)
    assert not result
    assert result.kind is FailureKind.CONSTRAINT_VIOLATION
    assert isinstance(result.failure.cause, sqlite3.IntegrityError)
    assert conn.execute("SELECT COUNT(*) FROM users").fetchone() == (1,)


def test_missing_binding_is_fatal(conn):
    with pytest.raises(UnrecoverableDriverError) as info:
        execute(conn, Statement("SELECT username FROM users WHERE email = :email"))
    assert isinstance(info.value.cause, sqlite3.ProgrammingError)


def test_non_driver_errors_propagate(conn):
    class Boom(Exception):
        pass

    class ExplodingConnection:
        def cursor(self):
            return conn.cursor()

        def commit(self):
            raise Boom()

        def rollback(self):
            conn.rollback()

    with pytest.raises(Boom):
        execute(ExplodingConnection(), Statement("SELECT 1"), dialect=PostgreSQLDialect())


def test_postgresql_rendering_and_returning():
    connection = RecordingConnection()
    statement = Statement(
        "INSERT INTO comments ( id, content ) VALUES ( DEFAULT, :content ) RETURNING id",
        {"content": "100% sure"},
        returns_key=True,
    )
    result = execute(connection, statement, dialect=PostgreSQLDialect())
    assert result.value.lastrowid == 42
    assert connection.log[0] == (
        "execute",
        "INSERT INTO comments ( id, content ) VALUES ( DEFAULT, %(content)s ) RETURNING id",
        {"content": "100% sure"},
    )
    assert ("commit",) in connection.log
    assert connection.log[-1] == ("close",)


@pytest.mark.parametrize(
    "exc, kind",
    [
        (sqlite3.IntegrityError("dup"), FailureKind.CONSTRAINT_VIOLATION),
        (sqlite3.DataError("too long"), FailureKind.CONSTRAINT_VIOLATION),
        (sqlite3.OperationalError("no such table: x"), FailureKind.STATEMENT_ERROR),
        (sqlite3.DatabaseError("odd"), FailureKind.STATEMENT_ERROR),
        (sqlite3.ProgrammingError("bad sql"), None),
        (sqlite3.InterfaceError("closed"), None),
    ],
)
def test_classify(conn, exc, kind):
    assert classify(conn, exc) is kind


def test_classify_rejects_foreign_exceptions(conn):
    with pytest.raises(TypeError):
        classify(conn, ValueError("nope"))


def test_operational_error_is_a_connection_error_on_postgresql(conn):
    kind = classify(conn, sqlite3.OperationalError("server closed"), PostgreSQLDialect())
    assert kind is FailureKind.CONNECTION_ERROR


def test_bad_sql_on_sqlite_is_a_statement_error(conn):
    result = execute(conn, Statement("SELECT username FROM missing_table"))
    assert not result
    assert result.kind is FailureKind.STATEMENT_ERROR
