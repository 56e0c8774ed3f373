# src/archespec/application/runtime/json_values.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Typed wrappers of request values.

Purpose:
    Wrap raw request input according to the schema it is declared with.
    Every scalar is cast to its schema's type, strings of the formats
    ``date``, ``date-time`` and ``duration`` are parsed, arrays wrap their
    items and objects route keys to properties or additional attributes.

Layer:
    application/runtime

Notes:
    - Input that can't be cast is kept as it is. It is reported as
      ``is invalid`` when validated, never raised.
    - Objects only populate properties that aren't read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from archespec.application.runtime.errors import BASE, Errors
from archespec.application.runtime.model import Model, Nestable
from archespec.domain.exceptions.meta import InvalidValueError
from archespec.domain.meta.schema.view import ArraySchemaView, ObjectSchemaView, SchemaView

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions

_FORMAT_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    "date": TypeAdapter(date),
    "date-time": TypeAdapter(datetime),
    "duration": TypeAdapter(timedelta),
}

_INVALID = "is invalid"


class JsonValue:
    """Base class of wrapped values.

    Subclasses set ``value``, the typed representation of the input.
    """

    value: Any = None

    def __init__(self, schema: SchemaView) -> None:
        self.schema = schema
        self.invalid = False

    @property
    def empty(self) -> bool:
        return False

    @property
    def null(self) -> bool:
        return False

    def _validation_value(self) -> Any:
        return self.value

    def serializable_value(self, *, jsonify_values: bool = False) -> Any:
        return to_jsonable_python(self.value) if jsonify_values else self.value

    def validate(self, errors: Errors) -> bool:
        """Validate against the schema. Detected errors are added to ``errors``."""
        if not self.schema.existence.reach(self):
            errors.add(BASE, "can't be blank")
            return False
        if self.null:
            return True
        if self.invalid:
            errors.add(BASE, _INVALID)
            return False
        results = []
        for validation in self.schema.validations.values():
            message = validation.validate(self._validation_value())
            if message is not None:
                errors.add(BASE, message)
            results.append(message is None)
        return all(results)

    def validate_nested(self, errors: Errors) -> bool:
        """Validate as the attribute of an object."""
        return self.validate(errors)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.value!r}>"


class JsonNull(JsonValue):
    @property
    def empty(self) -> bool:
        return True

    @property
    def null(self) -> bool:
        return True


class JsonBoolean(JsonValue):
    def __init__(self, value: Any, schema: SchemaView) -> None:
        super().__init__(schema)
        if isinstance(value, bool):
            self.value = value
        elif str(value).lower() in ("true", "false"):
            self.value = str(value).lower() == "true"
        else:
            self.value, self.invalid = value, True


class JsonInteger(JsonValue):
    def __init__(self, value: Any, schema: SchemaView) -> None:
        super().__init__(schema)
        try:
            self.value = schema.convert(int(value))
        except (TypeError, ValueError):
            self.value, self.invalid = value, True


class JsonNumber(JsonValue):
    def __init__(self, value: Any, schema: SchemaView) -> None:
        super().__init__(schema)
        try:
            self.value = schema.convert(float(value))
        except (TypeError, ValueError):
            self.value, self.invalid = value, True


class JsonString(JsonValue):
    """A string, parsed to a date, datetime or timedelta depending on its format."""

    def __init__(self, value: Any, schema: SchemaView) -> None:
        super().__init__(schema)
        self._raw = value if isinstance(value, (str, date, timedelta)) else str(value)
        adapter = _FORMAT_ADAPTERS.get(schema.typed_format or "")
        if adapter is None:
            self.value = schema.convert(self._raw)
            return
        try:
            self.value = schema.convert(adapter.validate_python(self._raw))
        except ValidationError:
            self.value, self.invalid = self._raw, True

    @property
    def empty(self) -> bool:
        return self._raw == ""

    def _validation_value(self) -> Any:
        return self._raw if isinstance(self._raw, str) else self.value


class JsonArray(JsonValue):
    def __init__(self, value: Any, schema: ArraySchemaView, *, context: str | None = None) -> None:
        super().__init__(schema)
        if isinstance(value, (list, tuple)):
            items = list(value)
        else:
            items = [value]
        item_schema = schema.items
        self.items = [wrap_json(item, item_schema, context=context) for item in items]  # type: ignore[arg-type]
        self.value = [item.value for item in self.items]

    @property
    def empty(self) -> bool:
        return not self.items

    def serializable_value(self, *, jsonify_values: bool = False) -> Any:
        return [item.serializable_value(jsonify_values=jsonify_values) for item in self.items]

    def validate(self, errors: Errors) -> bool:
        if not super().validate(errors):
            return False
        return all([item.validate(errors) for item in self.items])


class JsonObject(JsonValue, Nestable):
    """An object whose keys are routed to properties or additional attributes.

    ``value`` is the model the object is wrapped by, an instance of the
    schema's ``model`` class or of ``Model``.
    """

    def __init__(self, value: Any, schema: ObjectSchemaView, *, context: str | None = None) -> None:
        invalid = not isinstance(value, Mapping)
        if invalid:
            value = {}
        else:
            schema = schema.resolve_schema(value, context=context)
        super().__init__(schema)
        self.invalid = invalid
        self._size = len(value)

        properties = schema.resolve_properties(context=context)
        self._raw_attributes = {
            name: wrap_json(value.get(name), prop.schema, context=context) for name, prop in properties.items()
        }
        self._raw_additional_attributes: dict[str, JsonValue] = {}
        additional_properties = schema.additional_properties
        if additional_properties is not None:
            additional_schema = additional_properties.schema
            for key, item in value.items():
                if str(key) not in properties:
                    self._raw_additional_attributes[str(key)] = wrap_json(item, additional_schema, context=context)
        self._model: Model | None = None

    @property
    def raw_attributes(self) -> dict[str, JsonValue]:
        return self._raw_attributes

    @property
    def raw_additional_attributes(self) -> dict[str, JsonValue]:
        return self._raw_additional_attributes

    @property
    def model(self) -> Model:
        if self._model is None:
            model_class = getattr(self.schema, "model", None) or Model
            self._model = model_class(self)
        return self._model

    @property  # type: ignore[override]
    def value(self) -> Model:
        return self.model

    @property
    def empty(self) -> bool:
        return self._size == 0

    def _validation_value(self) -> Any:
        return self.attributes

    def serializable_value(self, *, jsonify_values: bool = False) -> Any:
        return self.serializable_dict(jsonify_values=jsonify_values)

    def validate(self, errors: Errors) -> bool:
        """Validate the object and its attributes in place."""
        if not super().validate(errors):
            return False
        return self.validate_attributes(errors)

    def validate_nested(self, errors: Errors) -> bool:
        """Validate the object itself, then delegate attributes to the model."""
        if not JsonValue.validate(self, errors):
            return False
        model = self.model
        if model.is_valid():
            return True
        errors.merge(model)
        return False

    def __repr__(self) -> str:
        return f"<JsonObject {self.model!r}>"


def wrap_json(
    value: Any,
    schema: Any,
    *,
    context: str | None = None,
    definitions: Definitions | None = None,
) -> JsonValue:
    """Wrap ``value`` according to ``schema``.

    Args:
        value: The raw input.
        schema: A schema view or a schema resolved in ``definitions``.
        context: ``"request"`` or ``"response"``, selects default values and
            filters properties by direction.
        definitions: The registry references are resolved in if ``schema``
            isn't a view.

    Raises:
        InvalidValueError: If the schema's type isn't supported.
    """
    view = schema if isinstance(schema, SchemaView) else SchemaView.wrap(schema, definitions)
    if value is None:
        value = view.default_value(context=context)  # type: ignore[union-attr]
    if value is None:
        return JsonNull(view)  # type: ignore[arg-type]

    type_ = view.type  # type: ignore[union-attr]
    if type_ == "array":
        return JsonArray(value, view, context=context)  # type: ignore[arg-type]
    if type_ == "boolean":
        return JsonBoolean(value, view)  # type: ignore[arg-type]
    if type_ == "integer":
        return JsonInteger(value, view)  # type: ignore[arg-type]
    if type_ == "number":
        return JsonNumber(value, view)  # type: ignore[arg-type]
    if type_ == "object":
        return JsonObject(value, view, context=context)  # type: ignore[arg-type]
    if type_ == "string":
        return JsonString(value, view)  # type: ignore[arg-type]
    raise InvalidValueError("type", type_, valid_values=["array", "boolean", "integer", "number", "object", "string"])


__all__ = [
    "JsonArray",
    "JsonBoolean",
    "JsonInteger",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonValue",
    "wrap_json",
]
