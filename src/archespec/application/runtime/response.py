# src/archespec/application/runtime/response.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Response serialization.

Purpose:
    Convert an application object to the JSON representation declared by the
    content of a response, as a single document or as a JSON text sequence
    (RFC 7464).

Layer:
    application/runtime

Notes:
    - A value that doesn't match its schema raises ``JsonifyError`` with the
      path of the value, e.g. ``foo.bar can't be nil`` or ``[2] can't be
      nil``. Such errors are server bugs and are logged before they are
      re-raised.
    - Objects are serialized against the inheriting schema selected by the
      discriminator, if any.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError

from archespec.config.settings import get_settings
from archespec.domain.exceptions.meta import InvalidArgumentError, inspect_value, to_sentence
from archespec.domain.exceptions.serialization import JsonifyError
from archespec.domain.meta.content import ContentView
from archespec.domain.meta.schema.view import ArraySchemaView, ObjectSchemaView, SchemaView

logger = logging.getLogger(__name__)

_RESPONSE = "response"
_RECORD_SEPARATOR = "\x1e"

_DATE = TypeAdapter(date)
_DATETIME = TypeAdapter(datetime)
_DURATION = TypeAdapter(timedelta)


class TextSink(Protocol):
    def write(self, text: str, /) -> Any: ...


def _omit_nil(value: Any, schema: SchemaView) -> bool:
    return schema.omittable and value is None


def _omit_empty(value: Any, schema: SchemaView) -> bool:
    if not schema.omittable:
        return False
    if value is None:
        return True
    return isinstance(value, (str, Mapping, list, tuple, set)) and len(value) == 0


_OMIT_CHECKS = {"nil": _omit_nil, "empty": _omit_empty}


class ResponseSerializer:
    """Serializes ``obj`` according to ``content``.

    Args:
        obj: The application object, a mapping or any object whose
            attributes are read by the properties of the schema.
        content: The content of the response the object is serialized as.
        omit: ``"nil"`` omits omittable properties whose value is None,
            ``"empty"`` omits omittable properties whose value is empty.
            Defaults to the ``response_omit`` setting.
        locale: The locale of the response.

    Raises:
        InvalidArgumentError: If ``omit`` is other than ``"nil"``, ``"empty"``
            or None.
    """

    def __init__(
        self,
        obj: Any,
        content: ContentView,
        *,
        omit: str | None = None,
        locale: str | None = None,
    ) -> None:
        if omit is None:
            omit = get_settings().response_omit
        if omit is not None and omit not in _OMIT_CHECKS:
            valid = to_sentence([inspect_value(name) for name in _OMIT_CHECKS])
            raise InvalidArgumentError(f"omit must be one of {valid}, is {inspect_value(omit)}")
        self._object = obj
        self._content = content
        self._omit = omit
        self._omit_check = None if omit is None else _OMIT_CHECKS[omit]
        self._locale = locale

    @property
    def locale(self) -> str | None:
        return self._locale

    @property
    def omit(self) -> str | None:
        return self._omit

    def jsonify(self) -> Any:
        """Return the JSON representation as nested dicts, lists and scalars.

        Raises:
            JsonifyError: If the object doesn't match the schema.
        """
        return self._logged(lambda: self._jsonify(self._object, self._content.schema))

    def to_json(self, **kwargs: Any) -> str:
        """Return the JSON representation as a string.

        Keyword arguments are passed to ``json.dumps``.
        """
        return json.dumps(self.jsonify(), **kwargs)

    def write_json_seq_to(self, stream: TextSink) -> None:
        """Write the response in JSON text sequence format to ``stream``.

        Each element of an array is written as a separate record. Any other
        object is written as a single record.
        """
        schema = self._content.schema
        if isinstance(schema, ArraySchemaView) and _is_iterable(self._object):
            items, item_schema = self._object, schema.items
        else:
            items, item_schema = [self._object], schema

        for item in items:
            value = self._logged(lambda item=item: self._jsonify(item, item_schema))
            stream.write(_RECORD_SEPARATOR)
            stream.write(json.dumps(value))
            stream.write("\n")

    def _logged(self, serialize: Any) -> Any:
        try:
            return serialize()
        except JsonifyError as exc:
            logger.error(
                "archespec.response.jsonify_failed",
                extra={"path": exc.path_string or None, "reason": exc.reason, "locale": self._locale},
            )
            raise

    def _jsonify(self, obj: Any, schema: SchemaView) -> Any:
        if obj is None:
            obj = schema.default_value(context=_RESPONSE)
        if obj is None:
            if not schema.nullable:
                raise JsonifyError("can't be nil")
            return None

        type_ = schema.type
        if type_ == "array":
            return self._jsonify_array(obj, schema)  # type: ignore[arg-type]
        if type_ == "boolean":
            return obj
        if type_ in ("integer", "number"):
            try:
                return schema.convert(schema.cast(obj))
            except (TypeError, ValueError):
                raise JsonifyError(f"isn't a valid {type_}: {obj!r}") from None
        if type_ == "object":
            return self._jsonify_object(obj, schema)  # type: ignore[arg-type]
        if type_ == "string":
            return schema.convert(_string(obj, schema.format))
        raise JsonifyError(f"has an invalid type: {json.dumps(type_)}")

    def _jsonify_array(self, array: Any, schema: ArraySchemaView) -> list[Any]:
        item_schema = schema.items
        items = array if _is_iterable(array) else [array]
        result = []
        for index, item in enumerate(items):
            try:
                result.append(self._jsonify(item, item_schema))  # type: ignore[arg-type]
            except JsonifyError as exc:
                raise exc.prepend(f"[{index}]") from None
        return result

    def _jsonify_object(self, obj: Any, schema: ObjectSchemaView) -> dict[str, Any]:
        schema = schema.resolve_schema(obj, context=_RESPONSE)
        result: dict[str, Any] = {}

        for prop in schema.resolve_properties(context=_RESPONSE).values():
            property_schema = prop.schema
            try:
                value = prop.reader(obj)
                if value is None:
                    value = property_schema.default
                if self._omit_check is not None and self._omit_check(value, property_schema):
                    continue
                result[prop.name] = self._jsonify(value, property_schema)
            except JsonifyError as exc:
                raise exc.prepend(prop.name) from None

        additional_properties = schema.additional_properties
        if additional_properties is not None:
            additional_schema = additional_properties.schema
            for key, value in (additional_properties.reader(obj) or {}).items():
                key = str(key)
                if key in result:
                    continue
                try:
                    result[key] = self._jsonify(value, additional_schema)
                except JsonifyError as exc:
                    raise exc.prepend(key) from None
        return result

    def __repr__(self) -> str:
        return f"<ResponseSerializer {self._object!r}>"


def _is_iterable(obj: Any) -> bool:
    return isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, Mapping))


def _string(value: Any, format_: str | None) -> str:
    try:
        if format_ == "date":
            if isinstance(value, datetime):
                value = value.date()
            return _DATE.dump_python(_DATE.validate_python(value), mode="json")
        if format_ == "date-time":
            return _DATETIME.dump_python(_DATETIME.validate_python(value), mode="json")
        if format_ == "duration":
            return _DURATION.dump_python(_DURATION.validate_python(value), mode="json")
    except ValidationError:
        raise JsonifyError(f"isn't a valid {format_}: {value!r}") from None
    return str(value)


__all__ = ["ResponseSerializer", "TextSink"]
