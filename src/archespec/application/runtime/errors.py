# src/archespec/application/runtime/errors.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Validation error collection.

Purpose:
    Collect the validation errors of a request. Errors are never raised,
    the caller decides whether an invalid request is rejected.

Layer:
    application/runtime

Notes:
    - ``base`` is the attribute of errors not related to a single attribute.
    - Errors added to ``base`` inside ``nested(name)`` are attributed to
      ``name``. Errors of a nested model are merged into the parent as
      ``'<attribute>' <message>``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

BASE = "base"


@dataclass(frozen=True)
class ValidationError:
    """A single validation error.

    Attributes:
        attribute: The attribute the error belongs to, ``base`` if it isn't
            related to a single attribute.
        message: The human-readable message, e.g. ``can't be blank``.
    """

    attribute: str
    message: str

    @property
    def full_message(self) -> str:
        if self.attribute == BASE:
            return self.message
        return f"{self.attribute} {self.message}"


class _HasErrors(Protocol):
    @property
    def errors(self) -> Errors: ...


class Errors:
    """An ordered collection of validation errors."""

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []
        self._path: list[str] = []

    def _attribute(self, attribute: str) -> str:
        if attribute == BASE:
            return ".".join(self._path) if self._path else BASE
        return ".".join([*self._path, attribute])

    def add(self, attribute: str, message: str) -> ValidationError:
        """Add an error to ``attribute`` within the current nesting."""
        error = ValidationError(self._attribute(str(attribute)), message)
        self._errors.append(error)
        return error

    @contextmanager
    def nested(self, name: str) -> Iterator[Errors]:
        """Attribute errors added within the block to ``name``."""
        self._path.append(str(name))
        try:
            yield self
        finally:
            self._path.pop()

    def merge(self, other: Errors | _HasErrors) -> None:
        """Merge the errors of a nested model or collection."""
        errors = other if isinstance(other, Errors) else other.errors
        for error in errors:
            if error.attribute == BASE:
                self.add(BASE, error.message)
            else:
                self.add(BASE, f"'{error.attribute}' {error.message}")

    def added(self, attribute: str, message: str) -> bool:
        """Return True if the error has been added."""
        return ValidationError(str(attribute), message) in self._errors

    def messages_for(self, attribute: str) -> list[str]:
        return [error.message for error in self._errors if error.attribute == attribute]

    @property
    def full_messages(self) -> list[str]:
        return [error.full_message for error in self._errors]

    def to_dict(self) -> dict[str, list[str]]:
        """Return the messages grouped by attribute."""
        result: dict[str, list[str]] = {}
        for error in self._errors:
            result.setdefault(error.attribute, []).append(error.message)
        return result

    def clear(self) -> None:
        self._errors.clear()

    @property
    def empty(self) -> bool:
        return not self._errors

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(list(self._errors))

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"<Errors {self.full_messages!r}>"


__all__ = ["BASE", "Errors", "ValidationError"]
