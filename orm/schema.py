"""
orm/schema.py
-------------
Schema descriptors and the entity registry.

A concrete entity type declares its attributes as class variables:

    @register
    class User(Entity):
        primary = "username"
        attributes = ("fullName", "password", "email", "isAdmin", "rememberToken")
        defaults = {"isAdmin": False, "rememberToken": ""}

`register` derives a `SchemaDescriptor` from those declarations once, at
import time. Every later lookup goes through the registry.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from orm.case import slot_name, to_snake
from orm.errors import SchemaError, UnregisteredEntityError
from orm.values import VALUE_TYPES, check_value
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SchemaDescriptor:
    """
    Static mapping metadata for one entity type.

    Attributes:
        table: Table name (lower-cased type name + 's' unless overridden).
        primary: Declared primary-key attribute name.
        primary_key: Primary-key column name.
        attributes: Declared non-key attribute names, in order.
        columns: Column names for `attributes`, same order.
        defaults: Attribute name -> default value.
        types: Attribute name -> declared Python type, when one is known.
        factory: Builds a bare instance of the type.
    """
    table: str
    primary: str
    primary_key: str
    attributes: tuple[str, ...]
    columns: tuple[str, ...]
    defaults: dict[str, Any] = field(default_factory=dict)
    types: dict[str, type] = field(default_factory=dict)
    factory: Optional[Callable[[], Any]] = None

    @property
    def select_columns(self) -> tuple[str, ...]:
        """Key column first, then the attribute columns."""
        return (self.primary_key, *self.columns)

    def slots(self) -> tuple[str, ...]:
        """Slot keys of the non-key attributes, in column order."""
        return tuple(slot_name(attr) for attr in self.attributes)

    def attribute_for_column(self, column: str) -> Optional[str]:
        """Declared attribute name backing `column`, or None."""
        for attr, col in zip(self.attributes, self.columns):
            if col == column:
                return attr
        return None


def build_descriptor(
    entity_cls: type,
    table: Optional[str] = None,
) -> SchemaDescriptor:
    """
    Derive a descriptor from an entity type's declarations.

    Missing declarations yield empty attribute lists and the "id" key.

    Raises:
        SchemaError: When the declarations contradict each other.
    """
    name = entity_cls.__name__
    primary = getattr(entity_cls, "primary", "id") or "id"
    attributes = tuple(getattr(entity_cls, "attributes", ()) or ())
    defaults = dict(getattr(entity_cls, "defaults", {}) or {})
    declared_types = dict(getattr(entity_cls, "types", {}) or {})

    slots = [slot_name(attr) for attr in attributes]
    if len(set(slots)) != len(slots):
        raise SchemaError(f"{name} declares the same attribute more than once")
    if slot_name(primary) in slots:
        raise SchemaError(
            f"{name}: primary key {primary!r} must not appear in attributes"
        )

    by_slot = dict(zip(slots, attributes))
    normalized_defaults: dict[str, Any] = {}
    for attr, value in defaults.items():
        if slot_name(attr) not in by_slot:
            raise SchemaError(f"{name}: default given for undeclared attribute {attr!r}")
        normalized_defaults[by_slot[slot_name(attr)]] = check_value(value)

    types: dict[str, type] = {}
    for attr, value in normalized_defaults.items():
        if value is not None:
            types[attr] = type(value)
    for attr, declared in declared_types.items():
        if slot_name(attr) not in by_slot:
            raise SchemaError(f"{name}: type given for undeclared attribute {attr!r}")
        if declared not in VALUE_TYPES:
            raise SchemaError(f"{name}: unsupported type {declared!r} for {attr!r}")
        types[by_slot[slot_name(attr)]] = declared

    return SchemaDescriptor(
        table=table or f"{name.lower()}s",
        primary=primary,
        primary_key=to_snake(primary),
        attributes=attributes,
        columns=tuple(to_snake(attr) for attr in attributes),
        defaults=normalized_defaults,
        types=types,
        factory=entity_cls,
    )


# ── REGISTRY ──────────────────────────────────────────────

_registry: dict[type, SchemaDescriptor] = {}


def register(entity_cls: Optional[type] = None, *, table: Optional[str] = None):
    """
    Class decorator registering an entity type.

    Usable bare (``@register``) or with an explicit table
    (``@register(table="people")``).
    """
    def decorate(cls: type) -> type:
        descriptor = build_descriptor(cls, table=table)
        _registry[cls] = descriptor
        logger.debug(
            f"Registered {cls.__name__} -> {descriptor.table} "
            f"({', '.join(descriptor.select_columns)})"
        )
        return cls

    if entity_cls is not None:
        return decorate(entity_cls)
    return decorate


def describe(entity_cls: type) -> SchemaDescriptor:
    """
    Look up the descriptor of a registered entity type.

    Raises:
        UnregisteredEntityError: If the type was never registered.
    """
    try:
        return _registry[entity_cls]
    except KeyError:
        raise UnregisteredEntityError(entity_cls) from None
