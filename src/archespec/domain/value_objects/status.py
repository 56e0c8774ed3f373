# src/archespec/domain/value_objects/status.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Response status keys.

Purpose:
    Responses are keyed by an exact status code, a range of codes such as
    ``4XX`` or ``default``. Looking up the response for an actual status
    prefers the exact code, then the containing range, then the default.

Layer:
    domain/value_objects
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from http import HTTPStatus
from typing import Any

from archespec.domain.exceptions.meta import InvalidArgumentError


@total_ordering
@dataclass(frozen=True)
class Status:
    """Base class of status keys, ordered by priority then value."""

    value: str
    priority: int

    def match(self, status: StatusCode | None) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def __lt__(self, other: Status) -> bool:
        return (self.priority, self.value) < (other.priority, other.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class StatusCode(Status):
    """An exact status code within 100..599."""

    code: int = 0

    def __init__(self, code: int) -> None:
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "value", str(code))
        object.__setattr__(self, "priority", 1)

    @classmethod
    def from_value(cls, value: Any) -> StatusCode:
        """Transform ``value`` to a status code.

        Accepts integers, numeric strings and reason names like ``"not_found"``.

        Raises:
            InvalidArgumentError: If ``value`` isn't a status code.
        """
        if isinstance(value, StatusCode):
            return value
        code: int | None = None
        if isinstance(value, int) and not isinstance(value, bool):
            code = value
        elif isinstance(value, str):
            if value.isdigit():
                code = int(value)
            elif value.upper() in HTTPStatus.__members__:
                code = HTTPStatus[value.upper()].value
        if code is None or not 100 <= code <= 599:
            raise InvalidArgumentError(f"invalid status code: {value!r}")
        return cls(code)

    def match(self, status: StatusCode | None) -> bool:
        return status == self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StatusCode) and other.code == self.code

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass(frozen=True, eq=False)
class StatusRange(Status):
    """A range of status codes such as ``4XX``."""

    hundreds: int = 0

    def __init__(self, hundreds: int) -> None:
        object.__setattr__(self, "hundreds", hundreds)
        object.__setattr__(self, "value", f"{hundreds}XX")
        object.__setattr__(self, "priority", 2)

    def match(self, status: StatusCode | None) -> bool:
        return status is not None and status.code // 100 == self.hundreds

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StatusRange) and other.hundreds == self.hundreds

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass(frozen=True, eq=False)
class _DefaultStatus(Status):
    def __init__(self) -> None:
        object.__setattr__(self, "value", "default")
        object.__setattr__(self, "priority", 3)

    def match(self, status: StatusCode | None) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _DefaultStatus)

    def __hash__(self) -> int:
        return hash(self.value)


DEFAULT: Status = _DefaultStatus()

INFORMATIONAL = StatusRange(1)
SUCCESS = StatusRange(2)
REDIRECTION = StatusRange(3)
CLIENT_ERROR = StatusRange(4)
SERVER_ERROR = StatusRange(5)

_RANGES = {f"{r.hundreds}xx": r for r in (INFORMATIONAL, SUCCESS, REDIRECTION, CLIENT_ERROR, SERVER_ERROR)}


def status_from(value: Any) -> Status:
    """Transform ``value`` to a status key.

    ``None`` and ``"default"`` give :data:`DEFAULT`, ``"4xx"``/``"4XX"`` give
    the matching range and anything else is parsed as an exact code.
    """
    if isinstance(value, Status):
        return value
    if value is None or value == "default":
        return DEFAULT
    if isinstance(value, str) and value.lower() in _RANGES:
        return _RANGES[value.lower()]
    return StatusCode.from_value(value)


__all__ = [
    "CLIENT_ERROR",
    "DEFAULT",
    "INFORMATIONAL",
    "REDIRECTION",
    "SERVER_ERROR",
    "SUCCESS",
    "Status",
    "StatusCode",
    "StatusRange",
    "status_from",
]
