# tests/unit/domain/meta/test_parameter.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for parameters and their OpenAPI rendering."""

from __future__ import annotations

import pytest

from archespec.domain.enums.parameter_location import ParameterLocation
from archespec.domain.exceptions import InvalidArgumentError, InvalidValueError
from archespec.domain.meta.definitions import Definitions
from archespec.domain.meta.parameter import Parameter, ParameterView, parameter_from
from archespec.domain.meta.reference import ParameterReference


def test_build_mixes_parameter_and_schema_keywords() -> None:
    parameter = Parameter.build("id", **{"in": "path", "type": "integer", "description": "The id"})

    assert parameter.in_ is ParameterLocation.PATH
    assert parameter.schema.type == "integer"
    assert parameter.description == "The id"
    assert parameter.required


@pytest.mark.parametrize("location", [None, ParameterLocation.QUERY, "query"])
def test_query_is_the_default_location(location: object) -> None:
    keywords = {} if location is None else {"in": location}
    parameter = Parameter.build("page", type="integer", **keywords)

    assert parameter.in_ is ParameterLocation.QUERY
    assert parameter.location == "query"
    assert Parameter(name="page").location == "query"


def test_invalid_parameters_are_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="can't be blank"):
        Parameter.build(" ")
    with pytest.raises(InvalidValueError, match='in must be one of "header"'):
        Parameter.build("session", **{"in": "cookie"})


def test_query_parameter_rendering() -> None:
    parameter = Parameter.build("page", type="integer")

    assert parameter.to_openapi_parameters("3.0") == [
        {"name": "page", "in": "query", "allowEmptyValue": True, "schema": {"type": "integer", "nullable": True}}
    ]
    assert parameter.to_openapi_parameters("2.0") == [
        {"name": "page", "in": "query", "allowEmptyValue": True, "type": "integer"}
    ]


def test_array_parameters_use_bracket_names() -> None:
    parameter = Parameter.build("ids", type="array", items={"type": "integer"}, existence=True)

    [rendered] = parameter.to_openapi_parameters("2.0")

    assert rendered["name"] == "ids[]"
    assert rendered["collectionFormat"] == "multi"
    assert rendered["required"] is True


def test_object_parameters_are_exploded() -> None:
    parameter = Parameter.build(
        "filter",
        type="object",
        properties={"name": {"type": "string"}, "range": {"properties": {"from": {"type": "integer"}}}},
    )

    names = [rendered["name"] for rendered in parameter.to_openapi_parameters("3.1")]

    assert names == ["filter[name]", "filter[range][from]"]


def test_querystring_parameters_need_openapi_3_2() -> None:
    parameter = Parameter.build("query", **{"in": "querystring", "type": "string"})

    assert parameter.to_openapi_parameters("3.1") == []
    [rendered] = parameter.to_openapi_parameters("3.2")
    assert rendered["in"] == "querystring"
    assert list(rendered["content"]) == ["text/plain"]


def test_parameter_references_resolve_through_the_registry() -> None:
    definitions = Definitions()
    definitions.add_parameter("page", type="integer")
    reference = parameter_from("page", {"ref": "page"})

    assert isinstance(reference, ParameterReference)
    assert reference.to_openapi_parameters("3.0", definitions) == [{"$ref": "#/components/parameters/page"}]
    view = ParameterView.wrap(reference, definitions)
    assert view.name == "page"
    assert view.schema.type == "integer"
