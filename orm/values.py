"""
orm/values.py
-------------
The closed set of values an entity attribute may hold, and the conversion
rules applied when values cross the store boundary.

    AttributeValue = str | int | float | bool | None
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional, Union

from orm.errors import UnsupportedValueError

AttributeValue = Union[str, int, float, bool, None]

VALUE_TYPES: tuple[type, ...] = (str, int, float, bool)


def check_value(value: Any) -> AttributeValue:
    """
    Ensure `value` belongs to the attribute variant.

    Raises:
        UnsupportedValueError: For any other type.
    """
    if value is None or isinstance(value, VALUE_TYPES):
        return value
    raise UnsupportedValueError(
        f"unsupported attribute value {value!r} ({type(value).__name__}); "
        "expected str, int, float, bool or None"
    )


def to_store(value: AttributeValue) -> AttributeValue:
    """Value to bind as a statement parameter. Variant members pass through unchanged."""
    return check_value(value)


def from_store(value: Any, declared: Optional[type] = None) -> AttributeValue:
    """
    Convert a value read from the driver into the attribute variant.

    Rules:
        - Decimal becomes float (int when `declared` is int).
        - date, time and datetime become ISO-8601 strings.
        - bytes and memoryview are decoded as UTF-8.
        - 0/1 integers become bool when the attribute is declared bool
          (SQLite has no boolean type).

    Args:
        value: Raw column value.
        declared: The attribute's declared type, if known.

    Raises:
        UnsupportedValueError: When no rule applies.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        value = int(value) if declared is int else float(value)
    elif isinstance(value, (datetime, date, time)):
        value = value.isoformat()
    elif isinstance(value, memoryview):
        value = value.tobytes().decode("utf-8")
    elif isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8")

    if declared is bool and isinstance(value, int) and not isinstance(value, bool):
        return bool(value)
    if declared is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return check_value(value)
