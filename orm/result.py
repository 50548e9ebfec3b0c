"""
orm/result.py
-------------
Explicit success/failure values returned by every store-facing operation.

`Ok` wraps the produced entity (or list of entities); `Err` wraps a
`Failure` describing why nothing was produced. `Ok` is truthy and `Err`
falsy, so ``if user.save(conn):`` keeps working for callers that only care
whether the operation succeeded.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    """
    Failure categories. CONNECTION_ERROR is only reported for PostgreSQL;
    sqlite3 uses OperationalError for bad SQL too, which is reported as
    STATEMENT_ERROR.
    """
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    CONNECTION_ERROR = "connection_error"
    STATEMENT_ERROR = "statement_error"
    INVALID_DELETE_TARGET = "invalid_delete_target"


@dataclass(frozen=True)
class Failure:
    """
    Why an operation produced no value.

    Attributes:
        kind: The failure category.
        message: Human-readable description.
        cause: The driver exception, when there was one.
    """
    kind: FailureKind
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def __bool__(self) -> bool:
        return True

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    failure: Failure

    def __bool__(self) -> bool:
        return False

    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> FailureKind:
        return self.failure.kind

    def unwrap(self):
        """Raise, since there is no value. Check `is_ok()` first."""
        raise ValueError(f"unwrap() called on Err ({self.failure})")

    def unwrap_or(self, default):
        return default


Result = Union[Ok[T], Err]


def not_found(message: str) -> Err:
    return Err(Failure(FailureKind.NOT_FOUND, message))


def invalid_delete_target(message: str) -> Err:
    return Err(Failure(FailureKind.INVALID_DELETE_TARGET, message))
