# src/archespec/domain/value_objects/openapi_version.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""OpenAPI specification versions.

Purpose:
    Identify the target format of a generated document. Versions compare by
    major then minor number so generators can branch with ``>=``.

Layer:
    domain/value_objects
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from archespec.domain.exceptions.meta import InvalidArgumentError


@dataclass(frozen=True, order=True)
class OpenAPIVersion:
    """A supported OpenAPI version."""

    major: int
    minor: int

    @classmethod
    def from_value(cls, value: Any) -> OpenAPIVersion:
        """Transform ``value`` to a version.

        Accepts ``"2.0"``, ``2``, ``None`` (2.0), ``"3.0"``, ``3``, ``"3.1"`` and
        ``"3.2"``.

        Raises:
            InvalidArgumentError: If the version isn't supported.
        """
        if isinstance(value, OpenAPIVersion):
            return value
        try:
            return _VERSIONS[value]
        except (KeyError, TypeError):
            raise InvalidArgumentError(f"unsupported OpenAPI version: {value!r}") from None

    def __str__(self) -> str:
        return _FULL_VERSIONS.get((self.major, self.minor), f"{self.major}.{self.minor}")


V2_0 = OpenAPIVersion(2, 0)
V3_0 = OpenAPIVersion(3, 0)
V3_1 = OpenAPIVersion(3, 1)
V3_2 = OpenAPIVersion(3, 2)

_VERSIONS: dict[Any, OpenAPIVersion] = {
    "2.0": V2_0,
    2: V2_0,
    None: V2_0,
    "3.0": V3_0,
    3: V3_0,
    "3.1": V3_1,
    "3.2": V3_2,
}

_FULL_VERSIONS = {(3, 0): "3.0.3", (3, 1): "3.1.1", (3, 2): "3.2.0"}

SUPPORTED_VERSIONS = ("2.0", "3.0", "3.1", "3.2")

__all__ = ["SUPPORTED_VERSIONS", "V2_0", "V3_0", "V3_1", "V3_2", "OpenAPIVersion"]
