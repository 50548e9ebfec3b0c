"""
orm/errors.py
-------------
Exceptions raised by the mapper.

Expected store failures (no row, constraint violation, lost connection) are
reported through `orm.result.Err`, not raised. The exceptions below signal
programming mistakes or faults the mapper cannot recover from.
"""


class MapperError(Exception):
    """Base class for all mapper exceptions."""


class SchemaError(MapperError):
    """An entity declaration is inconsistent (duplicate attributes, bad defaults...)."""


class UnregisteredEntityError(MapperError):
    """An entity type was used before being registered."""

    def __init__(self, entity_cls: type):
        super().__init__(
            f"{entity_cls.__name__} is not registered; decorate it with @register"
        )
        self.entity_cls = entity_cls


class UnknownAttributeError(MapperError, KeyError):
    """An attribute name is not declared on the entity type."""

    def __init__(self, entity_cls: type, attribute: str):
        super().__init__(f"{entity_cls.__name__} has no attribute {attribute!r}")
        self.entity_cls = entity_cls
        self.attribute = attribute

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedValueError(MapperError, TypeError):
    """A value falls outside the str/int/float/bool/None attribute variant."""


class UnrecoverableDriverError(MapperError):
    """
    The driver failed in a way that leaves the statement unusable
    (bad SQL, closed cursor or connection). The operation is aborted.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
