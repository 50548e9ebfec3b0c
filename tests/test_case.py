"""Tests for the camelCase <-> snake_case converter."""

import pytest

from orm.case import slot_name, to_camel, to_lower_camel, to_snake


@pytest.mark.parametrize(
    "name, expected",
    [
        ("fullName", "full_name"),
        ("FullName", "full_name"),
        ("isAdmin", "is_admin"),
        ("rememberToken", "remember_token"),
        ("email", "email"),
        ("id", "id"),
        ("createdAtUtc", "created_at_utc"),
    ],
)
def test_to_snake(name, expected):
    assert to_snake(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("full_name", "FullName"),
        ("remember_token", "RememberToken"),
        ("email", "Email"),
        ("created_at_utc", "CreatedAtUtc"),
    ],
)
def test_to_camel(name, expected):
    assert to_camel(name) == expected


def test_to_lower_camel():
    assert to_lower_camel("full_name") == "fullName"
    assert to_lower_camel("email") == "email"


@pytest.mark.parametrize(
    "name", ["FullName", "IsAdmin", "RememberToken", "Email", "ArticleIdOfParent"]
)
def test_camel_names_survive_round_trip(name):
    assert to_camel(to_snake(name)) == name


@pytest.mark.parametrize("name", ["fullName", "isAdmin", "rememberToken", "email"])
def test_lower_camel_names_survive_round_trip(name):
    assert to_lower_camel(to_snake(name)) == name


def test_slot_name_ignores_first_letter_case():
    assert slot_name("fullName") == slot_name("FullName") == "FullName"
    assert slot_name("full_name") == "FullName"
