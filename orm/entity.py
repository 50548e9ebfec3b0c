"""
orm/entity.py
-------------
Base class for mapped entities.

A subclass declares `primary`, `attributes`, `defaults` (and optionally
`types`), is registered with `@register`, and gains:

    Entity.fetch_one(conn, key, where="", params=None)  -> Result[Entity]
    Entity.fetch_all(conn, where="", params=None)       -> Result[list[Entity]]
    entity.save(conn, force_create=False)               -> Result[Entity]
    entity.destroy(conn)                                -> Result[Entity]

The connection is always supplied by the caller and never closed here.
"""

import json
from enum import Enum
from typing import Any, ClassVar, Optional

from orm import query
from orm.case import slot_name, to_lower_camel, to_snake
from orm.dialect import dialect_for
from orm.errors import UnknownAttributeError
from orm.executor import execute
from orm.marshal import entity_to_params, row_to_entity
from orm.result import Ok, Result, invalid_delete_target, not_found
from orm.schema import SchemaDescriptor, describe
from orm.values import AttributeValue, check_value
from utils.logger import get_logger

logger = get_logger(__name__)

NULL_SENTINEL = "NULL"


class EntityState(str, Enum):
    TRANSIENT = "transient"   # never stored
    PERSISTED = "persisted"   # a row exists for the key
    DELETED = "deleted"       # row removed, key cleared


def _has_key(key: Any) -> bool:
    """A key is present when it is not None, "" or numeric zero."""
    if key is None or key == "":
        return False
    if isinstance(key, (int, float)) and key == 0:
        return False
    return True


class Entity:
    """
    An in-memory record of a registered entity type.

    Attribute values are held in slots keyed by CamelCase name, so
    ``user["fullName"]`` and ``user["FullName"]`` address the same value.
    """

    primary: ClassVar[str] = "id"
    attributes: ClassVar[tuple[str, ...]] = ()
    defaults: ClassVar[dict[str, AttributeValue]] = {}
    types: ClassVar[dict[str, type]] = {}

    def __init__(self, **values: AttributeValue):
        descriptor = self.descriptor()
        self._key: AttributeValue = None
        self._state = EntityState.TRANSIENT
        self._values: dict[str, AttributeValue] = {slot: None for slot in descriptor.slots()}
        for attr, value in descriptor.defaults.items():
            self._values[slot_name(attr)] = value
        for attr, value in values.items():
            self[attr] = value

    @classmethod
    def descriptor(cls) -> SchemaDescriptor:
        return describe(cls)

    # ── ACCESS ────────────────────────────────────────────

    @property
    def key(self) -> AttributeValue:
        """Primary-key value, None until assigned."""
        return self._key

    @key.setter
    def key(self, value: AttributeValue) -> None:
        self._key = check_value(value)

    @property
    def state(self) -> EntityState:
        return self._state

    def mark_persisted(self) -> None:
        self._state = EntityState.PERSISTED

    def _slot(self, attribute: str) -> str:
        slot = slot_name(attribute)
        if slot not in self._values:
            raise UnknownAttributeError(type(self), attribute)
        return slot

    def _is_primary(self, attribute: str) -> bool:
        return slot_name(attribute) == slot_name(self.descriptor().primary)

    def get(self, attribute: str) -> AttributeValue:
        if self._is_primary(attribute):
            return self._key
        return self._values[self._slot(attribute)]

    def set(self, attribute: str, value: AttributeValue) -> None:
        if self._is_primary(attribute):
            self.key = value
            return
        self._values[self._slot(attribute)] = check_value(value)

    def __getitem__(self, attribute: str) -> AttributeValue:
        return self.get(attribute)

    def __setitem__(self, attribute: str, value: AttributeValue) -> None:
        self.set(attribute, value)

    def name(self) -> str:
        """Human-readable label; the key unless a subclass knows better."""
        return str(self._key)

    # ── READ ──────────────────────────────────────────────

    @classmethod
    def fetch_one(
        cls,
        conn,
        key: AttributeValue,
        where: str = "",
        params: Optional[dict[str, Any]] = None,
    ) -> Result["Entity"]:
        """
        Fetch the entity stored under `key`.

        Args:
            conn: Caller-owned DB-API connection.
            key: Primary-key value.
            where: Extra trusted SQL condition, ANDed with the key filter.
            params: Values for the placeholders used in `where`.

        Returns:
            Ok(entity), Err(NOT_FOUND) when no row matches, or the
            execution failure.
        """
        descriptor = describe(cls)
        statement = query.fetch_one_sql(descriptor, check_value(key), where, params)
        result = execute(conn, statement)
        if not result:
            return result
        rows = result.value.rows
        if not rows:
            return not_found(
                f"No {cls.__name__} with {descriptor.primary_key} = {key!r}"
            )
        return Ok(row_to_entity(cls, rows[0]))

    @classmethod
    def fetch_all(
        cls,
        conn,
        where: str = "",
        params: Optional[dict[str, Any]] = None,
    ) -> Result[list["Entity"]]:
        """Fetch every stored entity, optionally filtered by a trusted WHERE fragment."""
        statement = query.fetch_all_sql(describe(cls), where, params)
        result = execute(conn, statement)
        if not result:
            return result
        return Ok([row_to_entity(cls, row) for row in result.value.rows])

    # ── CREATE / UPDATE ───────────────────────────────────

    def save(self, conn, force_create: bool = False) -> Result["Entity"]:
        """
        Insert or update this entity.

        With `force_create` the row is always inserted with the current key
        (caller-assigned natural keys). Otherwise an entity that is persisted,
        or carries a key, is updated and anything else is inserted.
        """
        if force_create:
            return self.create(conn, forced=True)
        if self._state is EntityState.PERSISTED or _has_key(self._key):
            return self.update(conn)
        return self.create(conn)

    def create(self, conn, forced: bool = False) -> Result["Entity"]:
        """INSERT this entity; the store assigns the key unless `forced` or a key is set."""
        descriptor = describe(type(self))
        dialect = dialect_for(conn)
        generate_key = not forced and not _has_key(self._key)
        statement = query.insert_sql(
            descriptor,
            entity_to_params(self),
            generate_key=generate_key,
            dialect=dialect,
        )
        result = execute(conn, statement, dialect)
        if not result:
            return result
        if generate_key:
            self._key = result.value.lastrowid
        self._state = EntityState.PERSISTED
        logger.info(f"Created {descriptor.table} #{self._key}")
        return Ok(self)

    def update(self, conn) -> Result["Entity"]:
        """UPDATE every attribute column of the row for the current key."""
        descriptor = describe(type(self))
        result = execute(conn, query.update_sql(descriptor, entity_to_params(self)))
        if not result:
            return result
        if result.value.rowcount == 0:
            return not_found(f"No {descriptor.table} row #{self._key} to update")
        self._state = EntityState.PERSISTED
        logger.info(f"Updated {descriptor.table} #{self._key}")
        return Ok(self)

    # ── DELETE ────────────────────────────────────────────

    def _deletable(self) -> bool:
        if self._key is None:
            return False
        if self._state is EntityState.PERSISTED:
            return True
        if self._key == "":
            return False
        if isinstance(self._key, (int, float)) and self._key <= 0:
            return False
        return True

    def destroy(self, conn) -> Result["Entity"]:
        """
        DELETE the row for the current key and detach this entity.

        Returns:
            Ok(self) with the key cleared, Err(INVALID_DELETE_TARGET) without
            touching the store when there is no usable key, Err(NOT_FOUND)
            when no row matched, or the execution failure.
        """
        descriptor = describe(type(self))
        if not self._deletable():
            return invalid_delete_target(
                f"{type(self).__name__} has no key to delete by ({self._key!r})"
            )
        result = execute(conn, query.delete_sql(descriptor, self._key))
        if not result:
            return result
        if result.value.rowcount == 0:
            return not_found(f"No {descriptor.table} row #{self._key} to delete")
        logger.info(f"Deleted {descriptor.table} #{self._key}")
        self._key = None
        self._state = EntityState.DELETED
        return Ok(self)

    # ── SERIALIZATION ─────────────────────────────────────

    def to_dict(self) -> dict[str, AttributeValue]:
        """
        Key under its column name ("NULL" when the key is unset or zero),
        then every attribute under its lowerCamel name.
        """
        descriptor = self.descriptor()
        data: dict[str, AttributeValue] = {
            descriptor.primary_key: self._key if self._key else NULL_SENTINEL
        }
        for attr in descriptor.attributes:
            data[to_lower_camel(to_snake(attr))] = self._values[slot_name(attr)]
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def debug(self) -> None:
        """Log the key and every column value at DEBUG level."""
        descriptor = self.descriptor()
        logger.debug(f"---- {type(self).__name__} ({self._state.value})")
        logger.debug(f"{descriptor.primary_key} : {self._key!r}")
        for attr, column in zip(descriptor.attributes, descriptor.columns):
            logger.debug(f"{column} : {self._values[slot_name(attr)]!r}")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key == other._key and self._values == other._values

    __hash__ = None

    def __repr__(self) -> str:
        descriptor = self.descriptor()
        fields = [f"{descriptor.primary}={self._key!r}"]
        fields += [f"{attr}={self._values[slot_name(attr)]!r}" for attr in descriptor.attributes]
        return f"{type(self).__name__}({', '.join(fields)})"
