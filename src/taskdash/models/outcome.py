"""Normalised result of an API call.

Every request made through :class:`~taskdash.api.client.TaskdashClient`
resolves to either :class:`Success` or :class:`Failure`; transport errors
never propagate past the client as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")

INTERNAL_SERVER_ERROR = 500


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


_KIND_BY_STATUS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTH,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
}


def clamp_status(status_code: int) -> int:
    """Collapse anything above 500 (gateway, proxy codes) into 500."""
    if status_code > INTERNAL_SERVER_ERROR:
        return INTERNAL_SERVER_ERROR
    return status_code


def error_kind_for_status(status_code: int) -> ErrorKind:
    return _KIND_BY_STATUS.get(status_code, ErrorKind.INTERNAL)


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    status_code: int = 200

    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    status_code: int
    error_kind: ErrorKind
    message: str | None = None

    ok: ClassVar[bool] = False

    @classmethod
    def from_status(cls, status_code: int, message: str | None = None) -> Failure:
        """Build a failure for an HTTP *status_code*, clamping 5xx codes."""
        status = clamp_status(status_code)
        return cls(status_code=status, error_kind=error_kind_for_status(status), message=message)

    @classmethod
    def internal(cls, message: str | None = None) -> Failure:
        return cls(INTERNAL_SERVER_ERROR, ErrorKind.INTERNAL, message)


RequestOutcome = Union[Success[T], Failure]


def extract_error_message(payload: Any) -> str | None:
    """Pull the human readable message out of an ``{"errors": {...}}`` body.

    The API puts generic messages under ``errors.body`` and validation
    failures under one key per field.
    """
    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if not isinstance(errors, dict) or not errors:
        return None
    if "body" in errors:
        return str(errors["body"])
    return ", ".join(f"{field}: {rule}" for field, rule in errors.items())
