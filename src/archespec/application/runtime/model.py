# src/archespec/application/runtime/model.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Models wrapping request values.

Purpose:
    A model gives read access to the typed attributes of a request object
    and validates them. ``Model`` is the default class; applications may
    assign a subclass to an object schema or an operation to add behavior.

Layer:
    application/runtime
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from archespec.application.runtime.errors import Errors


class _Value(Protocol):
    @property
    def value(self) -> Any: ...

    def serializable_value(self, *, jsonify_values: bool = False) -> Any: ...

    def validate_nested(self, errors: Errors) -> bool: ...


class Nestable:
    """Read access to raw attributes and additional attributes.

    Subclasses provide ``raw_attributes`` and ``raw_additional_attributes``,
    both mapping names to wrapped JSON values.
    """

    @property
    def raw_attributes(self) -> Mapping[str, _Value]:  # pragma: no cover - abstract
        raise NotImplementedError

    @property
    def raw_additional_attributes(self) -> Mapping[str, _Value]:  # pragma: no cover - abstract
        raise NotImplementedError

    def __getitem__(self, name: str) -> Any:
        value = self.raw_attributes.get(str(name))
        return None if value is None else value.value

    @property
    def attributes(self) -> dict[str, Any]:
        return {name: value.value for name, value in self.raw_attributes.items()}

    @property
    def additional_attributes(self) -> dict[str, Any]:
        return {name: value.value for name, value in self.raw_additional_attributes.items()}

    def has_attribute(self, name: str) -> bool:
        return str(name) in self.raw_attributes

    def serializable_dict(
        self,
        *,
        only: Iterable[str] | None = None,
        exclude: Iterable[str] | None = None,
        jsonify_values: bool = False,
    ) -> dict[str, Any]:
        """Return serializable representations of all attributes.

        Args:
            only: Restricts the result to the given attributes.
            exclude: Attributes left out of the result.
            jsonify_values: Convert dates, times and durations to strings.
        """
        only_names = None if only is None else {str(name) for name in only}
        excluded = set() if exclude is None else {str(name) for name in exclude}
        result: dict[str, Any] = {}
        for attributes in (self.raw_attributes, self.raw_additional_attributes):
            for name, value in attributes.items():
                if name in excluded or (only_names is not None and name not in only_names):
                    continue
                result[name] = value.serializable_value(jsonify_values=jsonify_values)
        return result

    def validate(self, errors: Errors) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def validate_attributes(self, errors: Errors) -> bool:
        """Validate every attribute within its own error context."""
        results = []
        for attributes in (self.raw_attributes, self.raw_additional_attributes):
            for name, value in attributes.items():
                with errors.nested(name):
                    results.append(value.validate_nested(errors))
        return all(results)


class Model:
    """The default model of request objects and request parameters.

    Args:
        nested: The wrapped object or parameters.
    """

    def __init__(self, nested: Nestable) -> None:
        self._nested = nested
        self._errors: Errors | None = None

    def __getitem__(self, name: str) -> Any:
        return self._nested[name]

    @property
    def attributes(self) -> dict[str, Any]:
        return self._nested.attributes

    @property
    def additional_attributes(self) -> dict[str, Any]:
        return self._nested.additional_attributes

    def has_attribute(self, name: str) -> bool:
        return self._nested.has_attribute(name)

    def serializable_dict(self, **options: Any) -> dict[str, Any]:
        return self._nested.serializable_dict(**options)

    @property
    def errors(self) -> Errors:
        if self._errors is None:
            self._errors = Errors()
        return self._errors

    def is_valid(self) -> bool:
        """Validate the attributes. Detected errors replace ``errors``."""
        self.errors.clear()
        return self._nested.validate(self.errors)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        return type(other) is type(self) and other.attributes == self.attributes  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        attributes = ", ".join(f"{name}={value!r}" for name, value in self.attributes.items())
        return f"<{type(self).__name__}{' ' if attributes else ''}{attributes}>"


__all__ = ["Model", "Nestable"]
