"""
orm/ - Entity Mapper
====================
Maps registered entity types onto relational tables: schema descriptors,
SQL synthesis, row marshalling and the per-statement transaction runner.
The connection is always supplied and owned by the caller.
"""

from orm.entity import NULL_SENTINEL, Entity, EntityState
from orm.errors import (
    MapperError,
    SchemaError,
    UnknownAttributeError,
    UnrecoverableDriverError,
    UnregisteredEntityError,
    UnsupportedValueError,
)
from orm.result import Err, Failure, FailureKind, Ok, Result
from orm.schema import SchemaDescriptor, describe, register

__all__ = [
    "Entity",
    "EntityState",
    "NULL_SENTINEL",
    "register",
    "describe",
    "SchemaDescriptor",
    "Ok",
    "Err",
    "Result",
    "Failure",
    "FailureKind",
    "MapperError",
    "SchemaError",
    "UnknownAttributeError",
    "UnrecoverableDriverError",
    "UnregisteredEntityError",
    "UnsupportedValueError",
]
