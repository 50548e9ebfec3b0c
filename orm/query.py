"""
orm/query.py
------------
SQL synthesis from a schema descriptor.

Only schema-derived identifiers are written into the SQL text; every value
is bound through a ``:name`` placeholder whose name is the destination
column. The optional ``where`` fragment is trusted SQL from internal code
and is appended verbatim.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from orm.schema import SchemaDescriptor


@dataclass
class Statement:
    """
    A parameterized statement in canonical ``:name`` form.

    Attributes:
        sql: Statement text.
        params: Placeholder name -> value.
        returns_key: True when the statement yields the generated key as a row.
    """
    sql: str
    params: dict[str, Any] = field(default_factory=dict)
    returns_key: bool = False


def normalize_params(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Accept caller parameter names with or without the leading ':'."""
    if not params:
        return {}
    return {name.lstrip(":"): value for name, value in params.items()}


def _column_list(descriptor: SchemaDescriptor) -> str:
    return ", ".join(descriptor.select_columns)


# ── READ ──────────────────────────────────────────────────

def fetch_one_sql(
    descriptor: SchemaDescriptor,
    key: Any,
    where: str = "",
    params: Optional[Mapping[str, Any]] = None,
) -> Statement:
    """
    SELECT a single row by primary key, optionally narrowed by a WHERE fragment.

    Raises:
        ValueError: If `params` binds a name equal to the key column.

    Example:
        SELECT username, full_name FROM users WHERE username = :username AND is_admin = :admin
    """
    pk = descriptor.primary_key
    sql = f"SELECT {_column_list(descriptor)} FROM {descriptor.table} WHERE {pk} = :{pk}"
    if where:
        sql += f" AND {where}"
    bound = normalize_params(params)
    if pk in bound:
        raise ValueError(
            f"Parameter {pk!r} is reserved for the key of {descriptor.table}; "
            "rename it in the WHERE fragment"
        )
    bound[pk] = key
    return Statement(sql, bound)


def fetch_all_sql(
    descriptor: SchemaDescriptor,
    where: str = "",
    params: Optional[Mapping[str, Any]] = None,
) -> Statement:
    """SELECT every row, filtered by the WHERE fragment when one is given."""
    sql = f"SELECT {_column_list(descriptor)} FROM {descriptor.table}"
    if where:
        sql += f" WHERE {where}"
    return Statement(sql, normalize_params(params))


# ── CREATE ────────────────────────────────────────────────

def insert_sql(
    descriptor: SchemaDescriptor,
    values: Mapping[str, Any],
    generate_key: bool = False,
    dialect=None,
) -> Statement:
    """
    INSERT the key column followed by every attribute column.

    Args:
        descriptor: Target schema.
        values: Column -> value, including the key column.
        generate_key: Let the store assign the key. The key slot is then
            bound as NULL (or rendered as the dialect's generated-key SQL).
        dialect: Dialect used for the generated-key slot and RETURNING.
    """
    pk = descriptor.primary_key
    params = {column: values.get(column) for column in descriptor.select_columns}
    slots = [f":{column}" for column in descriptor.select_columns]
    returns_key = False

    if generate_key:
        params[pk] = None
        if dialect is not None:
            slots[0] = dialect.generated_key_value(pk)
            if slots[0] != f":{pk}":
                del params[pk]
            returns_key = dialect.supports_returning

    sql = (
        f"INSERT INTO {descriptor.table} ( {_column_list(descriptor)} ) "
        f"VALUES ( {', '.join(slots)} )"
    )
    if returns_key:
        sql += f" RETURNING {pk}"
    return Statement(sql, params, returns_key=returns_key)


# ── UPDATE ────────────────────────────────────────────────

def update_sql(descriptor: SchemaDescriptor, values: Mapping[str, Any]) -> Statement:
    """UPDATE every attribute column of the row identified by the key."""
    pk = descriptor.primary_key
    assignments = ", ".join(f"{column} = :{column}" for column in descriptor.columns)
    if not assignments:
        # No attributes: keep the statement valid, it still checks the row exists.
        assignments = f"{pk} = :{pk}"
    sql = f"UPDATE {descriptor.table} SET {assignments} WHERE {pk} = :{pk}"
    params = {column: values.get(column) for column in descriptor.select_columns}
    return Statement(sql, params)


# ── DELETE ────────────────────────────────────────────────

def delete_sql(descriptor: SchemaDescriptor, key: Any) -> Statement:
    pk = descriptor.primary_key
    return Statement(
        f"DELETE FROM {descriptor.table} WHERE {pk} = :{pk}",
        {pk: key},
    )
