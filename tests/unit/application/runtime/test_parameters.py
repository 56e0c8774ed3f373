# tests/unit/application/runtime/test_parameters.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for mapping request input to operation parameters."""

from __future__ import annotations

from typing import Any

import pytest

from archespec.application.interfaces.request_source import StaticRequest
from archespec.application.runtime.model import Model
from archespec.application.runtime.parameters import Parameters
from archespec.domain.meta.definitions import Definitions
from archespec.domain.meta.operation import OperationView


def _operation(**keywords: Any) -> OperationView:
    definitions = Definitions()
    definitions.add_operation("foo", path="/foos/{id}", **keywords)
    operation = definitions.find_operation("foo")
    assert operation is not None
    return operation


def test_required_parameter_must_not_be_blank() -> None:
    operation = _operation(parameters={"p": {"type": "string", "existence": True}})

    blank = Parameters({"p": ""}, StaticRequest(), operation).model
    assert not blank.is_valid()
    assert blank.errors.to_dict() == {"p": ["can't be blank"]}

    given = Parameters({"p": "q"}, StaticRequest(), operation).model
    assert given.is_valid()
    assert given["p"] == "q"


def test_parameters_are_cast_to_their_types() -> None:
    operation = _operation(
        parameters={
            "id": {"in": "path", "type": "integer"},
            "tags": {"type": "array", "items": {"type": "string"}},
        }
    )
    model = Parameters({"id": "7", "tags": ["a", "b"]}, StaticRequest(), operation).model

    assert model.attributes == {"id": 7, "tags": ["a", "b"]}


def test_header_parameters_are_read_from_the_headers() -> None:
    operation = _operation(parameters={"X-Locale": {"in": "header", "type": "string"}})
    request = StaticRequest(headers={"X-Locale": "de"})

    model = Parameters({"X-Locale": "en"}, request, operation).model

    assert model["X-Locale"] == "de"


def test_querystring_parameter_takes_the_whole_query() -> None:
    operation = _operation(parameters={"q": {"in": "querystring", "type": "string"}})
    request = StaticRequest(query_parameters={"foo": "bar", "tags": ["a", "b"]})

    parameters = Parameters({"foo": "bar", "tags": ["a", "b"]}, request, operation, strong=True)

    assert parameters.model["q"] == "foo=bar&tags=a&tags=b"
    assert parameters.model.is_valid()


def test_object_querystring_parameter_takes_the_query_parameters() -> None:
    operation = _operation(
        parameters={"q": {"in": "querystring", "type": "object", "properties": {"foo": {"type": "integer"}}}}
    )
    request = StaticRequest(query_parameters={"foo": "1"})

    parameters = Parameters({"foo": "1"}, request, operation)

    assert parameters.model["q"].attributes == {"foo": 1}


def test_request_body_properties_are_merged_into_the_attributes() -> None:
    operation = _operation(
        method="post",
        parameters={"id": {"in": "path", "type": "integer"}},
        request_body={"type": "object", "properties": {"name": {"type": "string"}}},
    )
    request = StaticRequest(media_type="application/json")

    model = Parameters({"id": "1", "name": "n"}, request, operation).model

    assert model.attributes == {"id": 1, "name": "n"}


def test_request_body_additional_properties() -> None:
    operation = _operation(
        method="post",
        request_body={"type": "object", "additional_properties": {"type": "integer"}},
    )

    parameters = Parameters({"foo": "1"}, StaticRequest(), operation, strong=True)

    assert parameters.model.additional_attributes == {"foo": 1}
    assert parameters.model.is_valid()


def test_strong_mode_rejects_unmapped_parameters() -> None:
    operation = _operation(parameters={"p": {"type": "string"}})

    model = Parameters({"p": "q", "x": "1"}, StaticRequest(), operation, strong=True).model

    assert not model.is_valid()
    assert model.errors.to_dict() == {"base": ["'x' isn't allowed"]}


def test_strong_mode_checks_nested_objects() -> None:
    operation = _operation(
        parameters={"foo": {"type": "object", "properties": {"bar": {"type": "string"}}}},
    )

    model = Parameters({"foo": {"bar": "x", "baz": "y"}}, StaticRequest(), operation, strong=True).model

    assert not model.is_valid()
    assert model.errors.full_messages == ["'foo.baz' isn't allowed"]


def test_weak_mode_ignores_unmapped_parameters() -> None:
    operation = _operation(parameters={"p": {"type": "string"}})

    model = Parameters({"p": "q", "x": "1"}, StaticRequest(), operation, strong=False).model

    assert model.is_valid()
    assert model.attributes == {"p": "q"}


def test_strong_mode_defaults_to_the_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    from archespec.config.settings import get_settings

    monkeypatch.setenv("ARCHESPEC_STRONG_PARAMETERS", "true")
    get_settings.cache_clear()
    operation = _operation(parameters={"p": {"type": "string"}})

    model = Parameters({"x": "1"}, StaticRequest(), operation).model

    assert not model.is_valid()


def test_nested_errors_are_merged_on_the_parent_attribute() -> None:
    operation = _operation(
        parameters={
            "foo": {"type": "object", "properties": {"bar": {"type": "string", "existence": True}}},
        }
    )

    model = Parameters({"foo": {}}, StaticRequest(), operation).model

    assert not model.is_valid()
    assert model.errors.to_dict() == {"foo": ["'bar' can't be blank"]}


def test_model_class_of_the_operation() -> None:
    class FooParameters(Model):
        pass

    operation = _operation(model=FooParameters, parameters={"p": {"type": "string"}})

    assert type(Parameters({}, StaticRequest(), operation).model) is FooParameters


def test_serializable_dict_of_the_model() -> None:
    operation = _operation(
        parameters={
            "day": {"type": "string", "format": "date"},
            "limit": {"type": "integer", "default": 10},
        }
    )
    model = Parameters({"day": "2024-01-02"}, StaticRequest(), operation).model

    assert model.serializable_dict(jsonify_values=True) == {"day": "2024-01-02", "limit": 10}
    assert model.serializable_dict(only=["limit"]) == {"limit": 10}
