# src/archespec/domain/exceptions/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Exception package export."""

from __future__ import annotations

from .base import DomainError
from .meta import (
    CircularDependencyError,
    ConfigurationError,
    FrozenAttributesError,
    InvalidArgumentError,
    InvalidValueError,
    MutuallyExclusiveError,
    SchemaResolutionError,
    UnresolvedReferenceError,
)
from .serialization import JsonifyError

__all__ = [
    "CircularDependencyError",
    "ConfigurationError",
    "DomainError",
    "FrozenAttributesError",
    "InvalidArgumentError",
    "InvalidValueError",
    "JsonifyError",
    "MutuallyExclusiveError",
    "SchemaResolutionError",
    "UnresolvedReferenceError",
]
