"""Outcome — tagged result of a service operation."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

from tutorialsapi.services import NotFoundError, ServiceError, ValidationError

T = TypeVar("T")


class OutcomeKind(str, enum.Enum):
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"


STATUS_CODES: dict[OutcomeKind, int] = {
    OutcomeKind.SUCCESS: 200,
    OutcomeKind.VALIDATION_ERROR: 400,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.SERVER_ERROR: 500,
}

_ERROR_KINDS: dict[type[ServiceError], OutcomeKind] = {
    NotFoundError: OutcomeKind.NOT_FOUND,
    ValidationError: OutcomeKind.VALIDATION_ERROR,
}


def kind_for_error(exc: ServiceError) -> OutcomeKind:
    """Map a service exception to its outcome kind (unknown -> server error)."""
    for cls in type(exc).__mro__:
        if cls in _ERROR_KINDS:
            return _ERROR_KINDS[cls]
    return OutcomeKind.SERVER_ERROR


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a success carrying ``value`` or a failure carrying ``message``."""

    kind: OutcomeKind
    value: T | None = None
    message: str | None = None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(OutcomeKind.SUCCESS, value=value)

    @classmethod
    def validation_error(cls, message: str) -> Outcome[T]:
        return cls(OutcomeKind.VALIDATION_ERROR, message=message)

    @classmethod
    def not_found(cls, message: str) -> Outcome[T]:
        return cls(OutcomeKind.NOT_FOUND, message=message)

    @classmethod
    def server_error(cls, message: str) -> Outcome[T]:
        return cls(OutcomeKind.SERVER_ERROR, message=message)

    @classmethod
    def from_error(cls, exc: ServiceError) -> Outcome[T]:
        return cls(kind_for_error(exc), message=str(exc))

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]
