# src/archespec/domain/meta/parameter.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Parameters.

Purpose:
    A parameter is read from the header, the path, the query or the whole
    query string of a request. Object parameters are exploded into one
    parameter per leaf property when rendered, each named
    ``parent[child]``.

Layer:
    domain/meta

Notes:
    - ``querystring`` parameters are rendered as such from OpenAPI 3.2 on.
      Before, object ones are exploded to query parameters and all others
      are left out.
    - OpenAPI 2.0 can't describe object parameters that aren't exploded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.enums.existence import Existence
from archespec.domain.enums.parameter_location import ParameterLocation
from archespec.domain.exceptions.meta import InvalidArgumentError, InvalidValueError
from archespec.domain.meta.example import Example, default_example, example_map
from archespec.domain.meta.model import Extensible, presence
from archespec.domain.meta.reference import ExampleReference, ParameterReference
from archespec.domain.meta.schema.factory import new_schema, schema_from
from archespec.domain.meta.schema.object import ObjectSchema
from archespec.domain.meta.schema.reference import concrete_schema
from archespec.domain.meta.schema.view import SchemaView
from archespec.domain.value_objects.media import MediaType
from archespec.domain.value_objects.openapi_version import V2_0, V3_2, OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions
    from archespec.domain.meta.schema.base import Schema

_PARAMETER_KEYWORDS = (
    "content_type",
    "deprecated",
    "description",
    "examples",
    "example",
    "in",
    "in_",
    "openapi_extensions",
)


def _location(value: Any) -> ParameterLocation:
    if value is None:
        return ParameterLocation.QUERY
    if isinstance(value, ParameterLocation):
        return value
    try:
        return ParameterLocation(str(value))
    except ValueError:
        raise InvalidValueError("in", value, valid_values=[loc.value for loc in ParameterLocation]) from None


@dataclass(eq=False, kw_only=True)
class Parameter(Extensible):
    """A parameter.

    Attributes:
        name: The name of the parameter, must not be blank.
        in_: The location, ``query`` by default.
        content_type: The media type describing a complex parameter in
            OpenAPI 3.0 and higher. ``querystring`` parameters default to
            ``text/plain``.
        deprecated: Whether the parameter is deprecated.
        description: The description of the parameter.
        examples: Example names mapped to examples or references.
        schema: The schema of the parameter.
    """

    name: str
    in_: ParameterLocation = ParameterLocation.QUERY
    content_type: MediaType | None = None
    deprecated: bool = False
    description: str | None = None
    examples: dict[str, Example | ExampleReference] = field(default_factory=dict)
    schema: Any = None

    def __post_init__(self) -> None:
        if self.name is None or not str(self.name).strip():
            raise InvalidArgumentError("parameter name can't be blank")
        self.name = str(self.name)
        self.in_ = _location(self.in_)
        if self.content_type is not None:
            self.content_type = MediaType.from_value(self.content_type)
        self.examples = example_map(self.examples)
        self.schema = schema_from({} if self.schema is None else self.schema)
        super().__post_init__()

    @classmethod
    def build(cls, name: str, **keywords: Any) -> Parameter:
        """Create a parameter from parameter and schema keywords mixed.

        ``in`` selects the location, ``schema`` names a reusable schema.
        """
        own = {key: keywords.pop(key) for key in _PARAMETER_KEYWORDS if key in keywords}
        if "in" in own:
            own["in_"] = own.pop("in")
        if "example" in own:
            own["examples"] = {**default_example(own.pop("example")), **example_map(own.get("examples"))}
        return cls(name=name, schema=new_schema(**keywords), **own)

    @property
    def location(self) -> str:
        return self.in_.value

    @property
    def required(self) -> bool:
        """True if the parameter is required. Path parameters always are."""
        return self.schema.existence > Existence.ALLOW_OMITTED or self.in_ is ParameterLocation.PATH

    @property
    def allow_empty_value(self) -> bool:
        """True for query parameters that may be empty."""
        return self.schema.existence <= Existence.ALLOW_EMPTY and self.in_ is ParameterLocation.QUERY

    def add_example(self, name: str = "default", **keywords: Any) -> Example:
        with self._modifying("examples"):
            self.examples[str(name)] = example = Example(**keywords)
        return example

    def to_openapi(self, version: Any, definitions: Definitions | None = None) -> dict[str, Any] | None:
        """Return the parameter object, None if it can't be described.

        Raises:
            InvalidArgumentError: If an object parameter is rendered for
                OpenAPI 2.0.
        """
        version = OpenAPIVersion.from_value(version)
        content_type = self.content_type
        if content_type is None and self.in_ is ParameterLocation.QUERYSTRING:
            content_type = MediaType.TEXT_PLAIN
        return self._parameter_object(
            self.name,
            concrete_schema(self.schema.resolve(definitions)),
            version,
            location=self.location,
            content_type=content_type,
            description=self.description,
            required=self.required,
            deprecated=self.deprecated,
            allow_empty_value=self.allow_empty_value,
            examples=self.examples,
        )

    def to_openapi_parameters(self, version: Any, definitions: Definitions | None = None) -> list[dict[str, Any]]:
        """Return the parameter objects describing the parameter."""
        version = OpenAPIVersion.from_value(version)
        is_querystring = self.in_ is ParameterLocation.QUERYSTRING
        schema = concrete_schema(self.schema.resolve(definitions))

        if isinstance(schema, ObjectSchema) and (version < V3_2 or not is_querystring):
            return self._explode(
                None if is_querystring else self.name,
                schema,
                version,
                definitions,
                location=ParameterLocation.QUERY.value if is_querystring else self.location,
                required=self.required,
                deprecated=self.deprecated,
            )
        result = self.to_openapi(version, definitions)
        return [] if result is None else [result]

    def _explode(
        self,
        name: str | None,
        schema: ObjectSchema,
        version: OpenAPIVersion,
        definitions: Definitions | None,
        *,
        location: str,
        required: bool | None,
        deprecated: bool | None,
    ) -> list[dict[str, Any]]:
        result: list[dict[str, Any]] = []
        for prop in schema.resolve_properties(definitions, context="request").values():
            property_schema = concrete_schema(prop.schema.resolve(definitions))
            parameter_name = f"{name}[{prop.name}]" if name else prop.name
            property_required = presence(required and prop.required)
            property_deprecated = presence(deprecated or property_schema.deprecated)

            if isinstance(property_schema, ObjectSchema):
                result.extend(
                    self._explode(
                        parameter_name,
                        property_schema,
                        version,
                        definitions,
                        location=location,
                        required=property_required,
                        deprecated=property_deprecated,
                    )
                )
                continue
            parameter = self._parameter_object(
                parameter_name,
                property_schema,
                version,
                location=location,
                description=property_schema.description,
                required=property_required,
                deprecated=property_deprecated,
                allow_empty_value=prop.schema.existence <= Existence.ALLOW_EMPTY,
            )
            if parameter is not None:
                result.append(parameter)
        return result

    def _parameter_object(
        self,
        name: str,
        schema: Schema,
        version: OpenAPIVersion,
        *,
        location: str,
        description: str | None,
        required: bool | None,
        deprecated: bool | None,
        allow_empty_value: bool,
        content_type: MediaType | None = None,
        examples: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        if location == ParameterLocation.QUERYSTRING.value and version < V3_2:
            return None
        if isinstance(schema, ObjectSchema) and version == V2_0:
            raise InvalidArgumentError(f"OpenAPI 2.0 doesn't allow object parameters in {location}")

        is_array = schema.type == "array"
        result: dict[str, Any] = {
            "name": f"{name}[]" if is_array else name,
            "in": location,
            "description": description,
            "required": presence(required),
            "allowEmptyValue": presence(allow_empty_value),
        }
        if version == V2_0:
            result["collectionFormat"] = "multi" if is_array else None
            result.update(schema.to_openapi(version))
            return self._with_openapi_extensions(result)

        openapi_schema = schema.to_openapi(version)
        openapi_schema.pop("deprecated", None)
        openapi_examples = presence({k: v.to_openapi(version) for k, v in (examples or {}).items()})
        result["deprecated"] = presence(deprecated)
        if content_type is None:
            result["schema"] = openapi_schema
            result["examples"] = openapi_examples
        else:
            media_type_object = {"schema": openapi_schema}
            if openapi_examples is not None:
                media_type_object["examples"] = openapi_examples
            result["content"] = {str(content_type): media_type_object}
        return self._with_openapi_extensions(result)


def parameter_from(name: str, value: Any) -> Parameter | ParameterReference:
    """Build a parameter or, for keywords containing ``ref``, a reference."""
    if isinstance(value, (Parameter, ParameterReference)):
        return value
    keywords = dict(value or {})
    if "ref" in keywords:
        return ParameterReference(**keywords)
    return Parameter.build(name, **keywords)


def parameter_map(values: Any) -> dict[str, Parameter | ParameterReference]:
    """Build parameters keyed by name."""
    return {str(name): parameter_from(str(name), value) for name, value in (values or {}).items()}


class ParameterView:
    """A parameter whose reference and schema are resolved."""

    def __init__(self, parameter: Parameter, definitions: Definitions | None) -> None:
        self._parameter = parameter
        self._definitions = definitions
        self._schema: SchemaView | None = None

    @classmethod
    def wrap(cls, parameter: Any, definitions: Definitions | None) -> ParameterView | None:
        if parameter is None:
            return None
        if isinstance(parameter, ParameterView):
            return parameter
        return cls(parameter.resolve(definitions), definitions)

    @property
    def parameter(self) -> Parameter:
        return self._parameter

    @property
    def name(self) -> str:
        return self._parameter.name

    @property
    def location(self) -> ParameterLocation:
        return self._parameter.in_

    @property
    def required(self) -> bool:
        return self._parameter.required

    @property
    def schema(self) -> SchemaView:
        if self._schema is None:
            self._schema = SchemaView.wrap(self._parameter.schema, self._definitions)
        return self._schema  # type: ignore[return-value]


__all__ = ["Parameter", "ParameterView", "parameter_from", "parameter_map"]
