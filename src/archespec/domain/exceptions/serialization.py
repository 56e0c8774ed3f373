# src/archespec/domain/exceptions/serialization.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Serialization exceptions.

Purpose:
    Errors raised when an application object doesn't match the schema of the
    response it is serialized against. These indicate server bugs, not client
    input problems.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from archespec.domain.exceptions.base import DomainError


class JsonifyError(DomainError):
    """Raised when an object can't be converted to its JSON representation.

    The error keeps the path of the offending value. Each recursion level of
    the serializer prepends its own segment, so a single top-level call
    reports a fully qualified path such as ``foo.bar`` or ``items[2]``.
    """

    code = "JSONIFY_ERROR"

    def __init__(self, reason: str, *, path: list[str] | None = None) -> None:
        self.reason = reason
        self.path: list[str] = list(path or [])
        super().__init__(self.message, details={"path": self.path_string or None})

    def prepend(self, segment: str) -> JsonifyError:
        """Prepend a path segment and return the same error."""
        self.path.insert(0, segment)
        self.args = (self.message,)
        self.details["path"] = self.path_string
        return self

    @property
    def path_string(self) -> str:
        """The path joined with dots, array indexes attached without one."""
        result = ""
        for segment in self.path:
            if segment.startswith("[") or not result:
                result += segment
            else:
                result += f".{segment}"
        return result

    @property
    def message(self) -> str:
        """The full message, ``response body`` if the root is at fault."""
        return f"{self.path_string or 'response body'} {self.reason}"

    def __str__(self) -> str:
        return self.message


__all__ = ["JsonifyError"]
