# src/archespec/domain/exceptions/meta.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Description-model exceptions.

Purpose:
    Errors raised while an API description is being built, resolved or
    rendered. Configuration errors are programmer errors and are expected to
    surface as process-startup failures.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from archespec.domain.exceptions.base import DomainError


def inspect_value(value: Any) -> str:
    """Render a value the way error messages quote it."""
    if value is None:
        return "None"
    if isinstance(value, str):
        return f'"{value}"'
    return repr(value)


def to_sentence(words: list[str], connector: str = "or") -> str:
    """Join words as in ``"a", "b" or "c"``."""
    if len(words) <= 1:
        return "".join(words)
    return f"{', '.join(words[:-1])} {connector} {words[-1]}"


class ConfigurationError(DomainError):
    """Base class for errors raised while building a description."""

    code = "CONFIGURATION_ERROR"


class InvalidValueError(ConfigurationError):
    """Raised when an attribute receives a value outside its allowed set.

    Messages read ``type must be one of "array" or "string", is "foo"``.
    """

    code = "INVALID_VALUE"

    def __init__(self, name: str, value: Any, *, valid_values: Iterable[Any] | None = None) -> None:
        allowed = list(valid_values or [])
        if not allowed:
            message = f"{name} must not be {inspect_value(value)}"
        elif len(allowed) == 1:
            message = f"{name} must be {inspect_value(allowed[0])}, is {inspect_value(value)}"
        else:
            words = to_sentence([inspect_value(v) for v in allowed])
            message = f"{name} must be one of {words}, is {inspect_value(value)}"
        super().__init__(message, details={"attribute": name, "value": repr(value)})
        self.attribute = name
        self.value = value


class InvalidArgumentError(ConfigurationError):
    """Raised when a caller-supplied argument can't be used."""

    code = "INVALID_ARGUMENT"


class FrozenAttributesError(ConfigurationError):
    """Raised when a frozen model is modified."""

    code = "FROZEN_ATTRIBUTES"

    def __init__(self, model: object) -> None:
        super().__init__(
            f"can't modify attributes of {type(model).__name__}",
            details={"model": type(model).__name__},
        )


class CircularDependencyError(ConfigurationError):
    """Raised on cycles between included definitions or ``all_of`` references."""

    code = "CIRCULAR_DEPENDENCY"


class MutuallyExclusiveError(ConfigurationError):
    """Raised when two attributes that exclude each other are both set."""

    code = "MUTUALLY_EXCLUSIVE"

    def __init__(self, first: str, second: str) -> None:
        super().__init__(
            f"{first} and {second} are mutually exclusive",
            details={"attributes": [first, second]},
        )


class UnresolvedReferenceError(DomainError):
    """Raised when a reference points to a component that doesn't exist."""

    code = "UNRESOLVED_REFERENCE"

    def __init__(self, ref: str) -> None:
        super().__init__(f"reference can't be resolved: '{ref}'", details={"ref": ref})
        self.ref = ref


class SchemaResolutionError(DomainError):
    """Raised when a discriminator can't select an inheriting schema."""

    code = "SCHEMA_RESOLUTION"


__all__ = [
    "CircularDependencyError",
    "ConfigurationError",
    "FrozenAttributesError",
    "InvalidArgumentError",
    "InvalidValueError",
    "MutuallyExclusiveError",
    "SchemaResolutionError",
    "UnresolvedReferenceError",
    "inspect_value",
    "to_sentence",
]
