# src/archespec/domain/meta/callback.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Callbacks, OpenAPI 3.0 and higher.

Layer:
    domain/meta
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.exceptions.meta import InvalidArgumentError
from archespec.domain.meta.model import MetaModel
from archespec.domain.meta.operation import Operation
from archespec.domain.meta.parameter import parameter_from, parameter_map
from archespec.domain.meta.path_item import PathItem
from archespec.domain.meta.reference import CallbackReference

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions


def _operation_map(values: Any) -> dict[str, Operation]:
    result: dict[str, Operation] = {}
    for method, value in (values or {}).items():
        if isinstance(value, Operation):
            result[str(method)] = value
        else:
            result[str(method)] = Operation(**{**dict(value or {}), "method": str(method)})
    return result


@dataclass(eq=False, kw_only=True)
class CallbackOperations(MetaModel):
    """The operations that can be called back for one expression.

    ``operations`` maps HTTP methods to operations.
    """

    description: str | None = None
    summary: str | None = None
    operations: dict[str, Operation] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.operations = _operation_map(self.operations)
        self.parameters = parameter_map(self.parameters)
        super().__post_init__()

    def add_operation(self, method: str = "get", **keywords: Any) -> Operation:
        with self._modifying("operations"):
            self.operations[method] = operation = Operation(**{**keywords, "method": method})
        return operation

    def add_parameter(self, name: str, **keywords: Any) -> Any:
        with self._modifying("parameters"):
            self.parameters[str(name)] = parameter = parameter_from(str(name), keywords)
        return parameter

    def to_openapi(self, version: Any, definitions: Definitions | None = None) -> dict[str, Any]:
        """Return the path item object describing the operations."""
        return PathItem(
            self.operations.values(),
            description=self.description,
            summary=self.summary,
            parameters=self.parameters,
        ).to_openapi(version, definitions)


@dataclass(eq=False, kw_only=True)
class Callback(MetaModel):
    """Runtime expressions mapped to the operations they call back."""

    expressions: dict[str, CallbackOperations] = field(default_factory=dict)

    def __post_init__(self) -> None:
        expressions = {}
        for expression, value in (self.expressions or {}).items():
            _check_expression(expression)
            expressions[str(expression)] = (
                value if isinstance(value, CallbackOperations) else CallbackOperations(**dict(value or {}))
            )
        self.expressions = expressions
        super().__post_init__()

    def add_expression(self, expression: str, **keywords: Any) -> CallbackOperations:
        """Add an expression.

        Raises:
            InvalidArgumentError: If ``expression`` is blank.
        """
        with self._modifying("expressions"):
            _check_expression(expression)
            self.expressions[str(expression)] = operations = CallbackOperations(**keywords)
        return operations

    def to_openapi(self, version: Any, definitions: Definitions | None = None) -> dict[str, Any]:
        return {
            expression: operations.to_openapi(version, definitions)
            for expression, operations in self.expressions.items()
        }


def _check_expression(expression: Any) -> None:
    if expression is None or not str(expression).strip():
        raise InvalidArgumentError("expression can't be blank")


def callback_from(value: Any) -> Callback | CallbackReference | None:
    """Build a callback or, for keywords containing ``ref``, a reference."""
    if value is None or isinstance(value, (Callback, CallbackReference)):
        return value
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(f"can't build callback from {value!r}")
    if "ref" in value:
        return CallbackReference(**value)
    return Callback(**value)


__all__ = ["Callback", "CallbackOperations", "callback_from"]
