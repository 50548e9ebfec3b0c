"""
orm/case.py
-----------
Name translation between in-memory attribute names (camelCase) and
SQL column names (snake_case).
"""

import re

_BOUNDARY = re.compile(r"(?<=\w)(?=[A-Z])")


def to_snake(name: str) -> str:
    """
    Convert a camelCase (or CamelCase) name to snake_case.

    Example:
        >>> to_snake("fullName")
        'full_name'
    """
    return _BOUNDARY.sub("_", name).lower()


def to_camel(name: str) -> str:
    """
    Convert a snake_case name to CamelCase.

    Example:
        >>> to_camel("full_name")
        'FullName'
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def to_lower_camel(name: str) -> str:
    """Convert a snake_case name to lowerCamelCase (``full_name`` -> ``fullName``)."""
    camel = to_camel(name)
    return camel[:1].lower() + camel[1:]


def slot_name(attribute: str) -> str:
    """Normalized slot key for an attribute: ``fullName`` and ``FullName`` both give ``FullName``."""
    return to_camel(to_snake(attribute))
