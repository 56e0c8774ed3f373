# src/archespec/domain/meta/example.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Examples of parameter and content values.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from archespec.domain.exceptions.meta import MutuallyExclusiveError
from archespec.domain.meta.model import Extensible
from archespec.domain.meta.reference import ExampleReference, coerce_component
from archespec.domain.value_objects.openapi_version import V3_2, OpenAPIVersion


@dataclass(eq=False, kw_only=True)
class Example(Extensible):
    """An example.

    Attributes:
        summary: A short description.
        description: A long description.
        value: The sample value, rendered as ``value`` before OpenAPI 3.2 and
            as ``dataValue`` from 3.2 on.
        serialized_value: The serialized form of the value, from 3.2 on.
        external_value: A URL pointing to the sample value. Excludes
            ``serialized_value``.
    """

    summary: str | None = None
    description: str | None = None
    value: Any = None
    serialized_value: Any = None
    external_value: str | None = None

    def __post_init__(self) -> None:
        self._check_exclusive()
        super().__post_init__()

    def _attribute_changed(self, name: str) -> None:
        if name in ("external_value", "serialized_value"):
            self._check_exclusive()

    def _check_exclusive(self) -> None:
        if self.external_value is not None and self.serialized_value is not None:
            raise MutuallyExclusiveError("external value", "serialized value")

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        result: dict[str, Any] = {"summary": self.summary, "description": self.description}
        if version < V3_2:
            result["value"] = self.value
        else:
            result["dataValue"] = self.value
            result["serializedValue"] = self.serialized_value
        result["externalValue"] = self.external_value
        return self._with_openapi_extensions(result)


def example_map(values: Any) -> dict[str, Example | ExampleReference]:
    """Build named examples from a mapping of names to examples or keywords."""
    return {str(k): coerce_component(v, Example, ExampleReference) for k, v in (values or {}).items()}


def default_example(value: Any) -> dict[str, Example]:
    """Return the single example ``"default"`` holding ``value``."""
    return {"default": Example(value=value)}


__all__ = ["Example", "default_example", "example_map"]
