"""Tests for SQL synthesis."""

import pytest

from models.comment import Comment
from models.user import User
from orm.dialect import PostgreSQLDialect, SQLiteDialect, placeholder_names
from orm.query import delete_sql, fetch_all_sql, fetch_one_sql, insert_sql, update_sql
from orm.schema import describe

USER_COLUMNS = "username, full_name, password, email, is_admin, remember_token"


def user_values(**overrides):
    values = {
        "username": "jdoe",
        "full_name": "John Doe",
        "password": "secret",
        "email": "jdoe@domain.com",
        "is_admin": False,
        "remember_token": "",
    }
    values.update(overrides)
    return values


def test_fetch_one():
    statement = fetch_one_sql(describe(User), "jdoe")
    assert statement.sql == (
        f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"
    )
    assert statement.params == {"username": "jdoe"}


def test_fetch_one_with_extra_where():
    statement = fetch_one_sql(
        describe(User), "jdoe", "is_admin = :admin", {":admin": True}
    )
    assert statement.sql.endswith("WHERE username = :username AND is_admin = :admin")
    assert statement.params == {"username": "jdoe", "admin": True}


def test_fetch_all():
    assert fetch_all_sql(describe(User)).sql == f"SELECT {USER_COLUMNS} FROM users"


def test_fetch_all_with_where():
    statement = fetch_all_sql(describe(User), "email = :email", {"email": "a@b.c"})
    assert statement.sql == f"SELECT {USER_COLUMNS} FROM users WHERE email = :email"
    assert statement.params == {"email": "a@b.c"}


def test_insert_column_order():
    statement = insert_sql(describe(User), user_values())
    assert statement.sql == (
        f"INSERT INTO users ( {USER_COLUMNS} ) VALUES ( :username, :full_name, "
        ":password, :email, :is_admin, :remember_token )"
    )
    assert list(statement.params) == USER_COLUMNS.split(", ")
    assert statement.params["username"] == "jdoe"


def test_insert_binds_null_key_when_store_generates_it():
    values = {"id": None, "author": "jdoe", "content": "hi", "article": 1, "created_at": None}
    statement = insert_sql(describe(Comment), values, generate_key=True, dialect=SQLiteDialect())
    assert statement.sql.startswith("INSERT INTO comments ( id, author, content, article, created_at )")
    assert "VALUES ( :id," in statement.sql
    assert statement.params["id"] is None
    assert not statement.returns_key


def test_insert_uses_default_and_returning_on_postgresql():
    values = {"id": None, "author": "jdoe", "content": "hi", "article": 1, "created_at": None}
    statement = insert_sql(describe(Comment), values, generate_key=True, dialect=PostgreSQLDialect())
    assert "VALUES ( DEFAULT, :author" in statement.sql
    assert statement.sql.endswith("RETURNING id")
    assert "id" not in statement.params
    assert statement.returns_key


def test_update_sets_every_attribute():
    statement = update_sql(describe(User), user_values(email="new@domain.com"))
    assert statement.sql == (
        "UPDATE users SET full_name = :full_name, password = :password, email = :email, "
        "is_admin = :is_admin, remember_token = :remember_token WHERE username = :username"
    )
    assert statement.params["email"] == "new@domain.com"
    assert statement.params["username"] == "jdoe"


def test_delete():
    statement = delete_sql(describe(User), "jdoe")
    assert statement.sql == "DELETE FROM users WHERE username = :username"
    assert statement.params == {"username": "jdoe"}


def test_parameter_names_equal_column_names():
    statement = update_sql(describe(User), user_values())
    assert set(placeholder_names(statement.sql)) == set(USER_COLUMNS.split(", "))


def test_values_are_never_interpolated():
    hostile = "x'); DROP TABLE users; --"
    statement = insert_sql(describe(User), user_values(full_name=hostile))
    assert hostile not in statement.sql
    assert statement.params["full_name"] == hostile


def test_fetch_one_rejects_parameter_named_like_the_key():
    with pytest.raises(ValueError):
        fetch_one_sql(describe(User), "jdoe", "username <> :username", {"username": "root"})
