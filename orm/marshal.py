"""
orm/marshal.py
--------------
Conversion between result rows (column -> value mappings) and entities.
"""

from typing import Any, Mapping

from orm.case import to_camel
from orm.schema import describe
from orm.values import from_store, to_store
from utils.logger import get_logger

logger = get_logger(__name__)


def row_to_entity(entity_cls: type, row: Mapping[str, Any]):
    """
    Build a persisted entity of `entity_cls` from a result row.

    The key column fills the key; every other column is translated to its
    CamelCase slot (``full_name`` -> ``FullName``) and overwrites the default
    set at construction. Columns the type does not declare are skipped.
    """
    descriptor = describe(entity_cls)
    entity = descriptor.factory()
    for column, value in row.items():
        if column == descriptor.primary_key:
            entity.key = from_store(value)
            continue
        attribute = descriptor.attribute_for_column(column)
        if attribute is None:
            logger.warning(f"{descriptor.table}: ignoring undeclared column {column!r}")
            continue
        entity.set(to_camel(column), from_store(value, descriptor.types.get(attribute)))
    entity.mark_persisted()
    return entity


def entity_to_params(entity) -> dict[str, Any]:
    """
    Statement parameters for `entity`: key column plus every attribute
    column, each value read from the column's CamelCase slot.
    """
    descriptor = describe(type(entity))
    params = {descriptor.primary_key: to_store(entity.key)}
    for column in descriptor.columns:
        params[column] = to_store(entity.get(to_camel(column)))
    return params


def entity_to_row(entity) -> dict[str, Any]:
    """The row `entity` would be stored as, in SELECT column order."""
    descriptor = describe(type(entity))
    params = entity_to_params(entity)
    return {column: params[column] for column in descriptor.select_columns}
