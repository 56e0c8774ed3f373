# src/archespec/domain/enums/existence.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Existence levels of parameters, properties and schemas.

Purpose:
    A single totally ordered scale that answers three questions at once:
    may a value be omitted, may it be null, and is it required in generated
    documents.

Layer:
    domain/enums

Notes:
    - Pure domain type: no logging, no transport concerns.
    - A higher level never grants more freedom than a lower one.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Protocol

from archespec.domain.exceptions.meta import InvalidValueError


class _Reachable(Protocol):
    @property
    def null(self) -> bool: ...

    @property
    def empty(self) -> bool: ...


class Existence(IntEnum):
    """Ordered existence levels, from most to least permissive."""

    ALLOW_OMITTED = 1
    ALLOW_NIL = 2
    ALLOW_EMPTY = 3
    PRESENT = 4

    @classmethod
    def from_value(cls, value: Any) -> Existence:
        """Transform ``value`` to an existence level.

        Args:
            value: An ``Existence``, a boolean, ``None`` or one of the names
                ``"present"``, ``"allow_empty"``, ``"allow_nil"``,
                ``"allow_null"`` and ``"allow_omitted"``.

        Raises:
            InvalidValueError: If ``value`` doesn't denote an existence level.
        """
        if isinstance(value, Existence):
            return value
        if value is True:
            return cls.PRESENT
        if value is None or value is False:
            return cls.ALLOW_OMITTED
        key = str(value).lower()
        try:
            return _NAMES[key]
        except KeyError:
            raise InvalidValueError(
                "existence", value, valid_values=[True, False, *_NAMES]
            ) from None

    @property
    def nullable(self) -> bool:
        """Whether a value may be null."""
        return self <= Existence.ALLOW_NIL

    @property
    def omittable(self) -> bool:
        """Whether a value may be absent."""
        return self <= Existence.ALLOW_OMITTED

    @property
    def required(self) -> bool:
        """Whether a value is listed as required in generated documents."""
        return self > Existence.ALLOW_OMITTED

    def reach(self, value: _Reachable) -> bool:
        """Return True if a JSON value satisfies this level.

        ``value`` is any object exposing ``null`` and ``empty`` flags, for
        example a wrapped request value.
        """
        if value.null and self > Existence.ALLOW_NIL:
            return False
        return not (value.empty and self > Existence.ALLOW_EMPTY)


_NAMES: dict[str, Existence] = {
    "present": Existence.PRESENT,
    "allow_empty": Existence.ALLOW_EMPTY,
    "allow_nil": Existence.ALLOW_NIL,
    "allow_null": Existence.ALLOW_NIL,
    "allow_omitted": Existence.ALLOW_OMITTED,
}

__all__ = ["Existence"]
