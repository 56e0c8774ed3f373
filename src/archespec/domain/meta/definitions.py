# src/archespec/domain/meta/definitions.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""The definitions registry.

Purpose:
    ``Definitions`` is the root of a description. It holds the reusable
    components, the operations and the paths of an API, and composes with
    other registries in two ways:

    * ``parent``: single inheritance, used to share base definitions.
    * ``include``: multiple inclusion, used to compose libraries.

    Lookups walk ``ancestors`` (the registry itself, everything included,
    then the parent chain) and the nearest definition wins.

Layer:
    domain/meta

Notes:
    Two caches are kept per registry:

    * merged attributes, folded over all ancestors. Any change of a
      registry drops this cache in the registry and in every registry
      inheriting or including it.
    * common path values, keyed by pathname and attribute name. A change of
      a path drops the entries of that path and of the paths below it, in
      the registry and in every registry inheriting or including it.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import MISSING, dataclass, field, fields
from typing import Any

from archespec.domain.exceptions.meta import CircularDependencyError, InvalidArgumentError
from archespec.domain.meta.callback import Callback, callback_from
from archespec.domain.meta.defaults import Defaults
from archespec.domain.meta.example import Example, example_map
from archespec.domain.meta.header import Header
from archespec.domain.meta.info import Info
from archespec.domain.meta.link import Link
from archespec.domain.meta.model import Extensible, ExternalDocumentation, check_value, coerce
from archespec.domain.meta.operation import (
    SCHEMES,
    Operation,
    OperationView,
    security_requirement_list,
    server_list,
)
from archespec.domain.meta.parameter import parameter_from, parameter_map
from archespec.domain.meta.path import Path
from archespec.domain.meta.reference import (
    ExampleReference,
    HeaderReference,
    LinkReference,
    SecuritySchemeReference,
    coerce_component,
)
from archespec.domain.meta.request_body import request_body_from
from archespec.domain.meta.response import match_response, response_from
from archespec.domain.meta.schema.factory import SCHEMA_TYPES, new_schema, schema_from
from archespec.domain.meta.security import SecurityRequirement, SecurityScheme, new_security_scheme
from archespec.domain.meta.server import Server
from archespec.domain.meta.tag import Tag
from archespec.domain.value_objects.pathname import Pathname

# Component kinds mapped to the attributes holding them.
COMPONENT_TABLES = {
    "callback": "callbacks",
    "example": "examples",
    "header": "headers",
    "link": "links",
    "parameter": "parameters",
    "request_body": "request_bodies",
    "response": "responses",
    "schema": "schemas",
    "security_scheme": "security_schemes",
}


def _header(value: Any) -> Any:
    if isinstance(value, Mapping) and "ref" not in value:
        return Header.build(**value)
    return coerce_component(value, Header, HeaderReference)


def _security_scheme(value: Any) -> Any:
    if value is None or isinstance(value, (SecurityScheme, SecuritySchemeReference)):
        return value
    keywords = dict(value)
    if "ref" in keywords:
        return SecuritySchemeReference(**keywords)
    return new_security_scheme(**keywords)


def _underscore(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name).lower()


def _default_operation_name(owner: Any) -> str | None:
    name = getattr(owner, "__name__", None)
    if name is None:
        return None
    return _underscore(name.removesuffix("Controller")) or None


def _default_server_url(owner: Any) -> str | None:
    # Classes enclosing the owner, e.g. Api.V1.FoosController -> /api/v1
    qualname = getattr(owner, "__qualname__", None)
    if qualname is None:
        return None
    *namespace, _ = qualname.rpartition("<locals>.")[2].split(".")
    return "/" + "/".join(_underscore(part) for part in namespace)


@dataclass(eq=False, kw_only=True, init=False)
class Definitions(Extensible):
    """The registry of an API description.

    Args:
        owner: The object the registry describes, e.g. a controller class.
            Its name is the default operation name.
        parent: The registry this one inherits from.
        include: Registries to be included.
        **keywords: Initial values of the attributes below.

    Attributes:
        base_path: The base path of the API, OpenAPI 2.0 only.
        callbacks: Reusable callbacks, OpenAPI 3.0 and higher.
        defaults: Schema types mapped to their type-level defaults.
        examples: Reusable examples, OpenAPI 3.0 and higher.
        external_docs: Reference to external documentation.
        headers: Reusable headers, OpenAPI 3.0 and higher.
        host: The host serving the API, OpenAPI 2.0 only.
        info: The ``Info`` object.
        links: Reusable links, OpenAPI 3.0 and higher.
        operations: Operation names mapped to operations.
        parameters: Reusable parameters.
        paths: Pathnames mapped to paths.
        request_bodies: Reusable request bodies.
        responses: Reusable responses.
        schemas: Reusable schemas.
        schemes: Transfer protocols, OpenAPI 2.0 only.
        security_requirements: The top-level security requirements.
        security_schemes: The security schemes.
        servers: The servers, OpenAPI 3.0 and higher.
        tags: The tags.
    """

    base_path: Pathname | None = None
    callbacks: dict[str, Any] = field(default_factory=dict)
    defaults: dict[str, Defaults] = field(default_factory=dict)
    examples: dict[str, Any] = field(default_factory=dict)
    external_docs: ExternalDocumentation | None = None
    headers: dict[str, Any] = field(default_factory=dict)
    host: str | None = None
    info: Info | None = None
    links: dict[str, Any] = field(default_factory=dict)
    operations: dict[str, Operation] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)
    paths: dict[Pathname, Path] = field(default_factory=dict)
    request_bodies: dict[str, Any] = field(default_factory=dict)
    responses: dict[str, Any] = field(default_factory=dict)
    schemas: dict[str, Any] = field(default_factory=dict)
    schemes: list[str] = field(default_factory=list)
    security_requirements: list[SecurityRequirement] = field(default_factory=list)
    security_schemes: dict[str, Any] = field(default_factory=dict)
    servers: list[Server] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)

    def __init__(
        self,
        *,
        owner: Any = None,
        parent: Definitions | None = None,
        include: Definitions | list[Definitions] | None = None,
        **keywords: Any,
    ) -> None:
        self._owner = owner
        self._parent = parent
        self._included: list[Definitions] = []
        self._children: list[Definitions] = []
        self._dependents: list[Definitions] = []
        self._ancestors: list[Definitions] | None = None
        self._cache: dict[str, Any] = {}

        for item in fields(self):
            if item.name in keywords:
                value = keywords.pop(item.name)
            elif item.default_factory is not MISSING:
                value = item.default_factory()
            else:
                value = item.default
            object.__setattr__(self, item.name, value)
        if keywords:
            raise InvalidArgumentError(f"unknown attributes: {', '.join(sorted(keywords))}")
        self.__post_init__()

        if include is not None:
            for definitions in include if isinstance(include, list) else [include]:
                self.include(definitions)
        if parent is not None:
            parent._children.append(self)

    def __post_init__(self) -> None:
        self.base_path = None if self.base_path is None else Pathname.from_value(self.base_path)
        self.callbacks = {str(k): callback_from(v) for k, v in self.callbacks.items()}
        self.defaults = {
            check_value("type", str(k), tuple(SCHEMA_TYPES)): coerce(v, Defaults)
            for k, v in self.defaults.items()
        }
        self.examples = example_map(self.examples)
        self.external_docs = coerce(self.external_docs, ExternalDocumentation)
        self.headers = {str(k): _header(v) for k, v in self.headers.items()}
        self.info = coerce(self.info, Info)
        self.links = {str(k): coerce_component(v, Link, LinkReference) for k, v in self.links.items()}
        self.operations = {
            str(name): value if isinstance(value, Operation) else Operation(name=str(name), **dict(value or {}))
            for name, value in self.operations.items()
        }
        self.parameters = parameter_map(self.parameters)
        paths = {}
        for name, value in self.paths.items():
            if isinstance(value, Path):
                value._owner = self
                paths[value.name] = value
            else:
                pathname = Pathname.from_value(name)
                paths[pathname] = Path(name=pathname, owner=self, **dict(value or {}))
        self.paths = paths
        self.request_bodies = {str(k): request_body_from(v) for k, v in self.request_bodies.items()}
        self.responses = {str(k): response_from(v) for k, v in self.responses.items()}
        self.schemas = {str(k): schema_from(v) for k, v in self.schemas.items()}
        self.schemes = [check_value("scheme", scheme, SCHEMES) for scheme in self.schemes]
        self.security_requirements = security_requirement_list(self.security_requirements)
        self.security_schemes = {str(k): _security_scheme(v) for k, v in self.security_schemes.items()}
        self.servers = server_list(self.servers)
        self.tags = [coerce(tag, Tag) for tag in self.tags]  # type: ignore[misc]
        super().__post_init__()

    def __repr__(self) -> str:
        owner = getattr(self._owner, "__name__", self._owner)
        return f"<Definitions owner={owner!r}>"

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def default_server(self) -> Server | None:
        """The server used in documents if none is declared.

        Its URL is made of the classes ``owner`` is nested in, e.g.
        ``/api/v1`` for ``Api.V1.FoosController``. None if there is no
        owner class.
        """
        url = _default_server_url(self._owner)
        return Server(url=url) if url is not None else None

    @property
    def parent(self) -> Definitions | None:
        return self._parent

    # -- adding components --------------------------------------------------

    def _add(self, attribute: str, name: Any, value: Any) -> Any:
        with self._modifying(attribute):
            getattr(self, attribute)[name] = value
        return value

    def add_callback(self, name: str, **keywords: Any) -> Any:
        return self._add("callbacks", str(name), callback_from(keywords))

    def add_default(self, type_: str, **keywords: Any) -> Defaults:
        """Register the default values of all schemas of ``type_``.

        Raises:
            InvalidValueError: If ``type_`` isn't a schema type.
        """
        check_value("type", str(type_), tuple(SCHEMA_TYPES))
        return self._add("defaults", str(type_), Defaults(**keywords))

    def add_example(self, name: str, **keywords: Any) -> Any:
        return self._add("examples", str(name), coerce_component(keywords, Example, ExampleReference))

    def add_header(self, name: str, **keywords: Any) -> Any:
        return self._add("headers", str(name), _header(keywords))

    def add_link(self, name: str, **keywords: Any) -> Any:
        return self._add("links", str(name), coerce_component(keywords, Link, LinkReference))

    def add_operation(self, name: str | None = None, parent_path: Any = None, **keywords: Any) -> Operation:
        """Add an operation.

        ``name`` and, unless ``path`` is given, ``parent_path`` default to
        the name derived from ``owner``.
        """
        default_name = _default_operation_name(self._owner)
        name = default_name if name is None else str(name)
        if parent_path is None and not keywords.get("path"):
            parent_path = default_name
        operation = Operation(name=name, parent_path=parent_path, **keywords)
        return self._add("operations", name, operation)

    def add_parameter(self, name: str, **keywords: Any) -> Any:
        return self._add("parameters", str(name), parameter_from(str(name), keywords))

    def add_path(self, name: Any, **keywords: Any) -> Path:
        pathname = Pathname.from_value(name)
        return self._add("paths", pathname, Path(name=pathname, owner=self, **keywords))

    def add_request_body(self, name: str, **keywords: Any) -> Any:
        return self._add("request_bodies", str(name), request_body_from(keywords))

    def add_response(self, name: str, **keywords: Any) -> Any:
        return self._add("responses", str(name), response_from(keywords))

    def add_schema(self, name: str, **keywords: Any) -> Any:
        return self._add("schemas", str(name), new_schema(**keywords))

    def add_security_scheme(self, name: str, **keywords: Any) -> Any:
        return self._add("security_schemes", str(name), _security_scheme(keywords))

    def add_security_requirement(self, value: Any) -> SecurityRequirement:
        with self._modifying("security_requirements"):
            self.security_requirements.append(requirement := SecurityRequirement.build(value))
        return requirement

    def add_server(self, **keywords: Any) -> Server:
        with self._modifying("servers"):
            self.servers.append(server := Server(**keywords))
        return server

    def add_tag(self, **keywords: Any) -> Tag:
        with self._modifying("tags"):
            self.tags.append(tag := Tag(**keywords))
        return tag

    # -- inheritance and inclusion ------------------------------------------

    @property
    def ancestors(self) -> list[Definitions]:
        """The registry itself, all registries included and the parent chain."""
        if self._ancestors is None:
            ancestors: list[Definitions] = [self]
            for definitions in [*self._included, self._parent]:
                if definitions is not None:
                    ancestors.extend(definitions.ancestors)
            self._ancestors = list(dict.fromkeys(ancestors))
        return self._ancestors

    def include(self, definitions: Definitions) -> Definitions:
        """Include ``definitions``.

        Raises:
            CircularDependencyError: If ``definitions`` is this registry or
                includes it, directly or transitively.
        """
        if self._is_circular(definitions):
            raise CircularDependencyError(
                f"detected circular dependency between {self!r} and {definitions!r}"
            )
        self._included.append(definitions)
        definitions._dependents.append(self)
        self.invalidate_ancestors()
        return self

    def _is_circular(self, other: Definitions) -> bool:
        if other is self:
            return True
        return any(self._is_circular(included) for included in other._included)

    def _descendants(self) -> Iterator[Definitions]:
        yield from self._children
        yield from self._dependents

    def invalidate_ancestors(self) -> None:
        """Drop the cached ancestors and everything derived from them."""
        self._ancestors = None
        self._cache = {}
        for descendant in self._descendants():
            descendant.invalidate_ancestors()

    def invalidate_attributes(self) -> None:
        """Drop the cached attributes here and in all descendants."""
        self._cache = {}
        for descendant in self._descendants():
            descendant.invalidate_attributes()

    def invalidate_path_attribute(self, pathname: Any, name: str) -> None:
        """Drop the cached common values of ``name`` for ``pathname`` and the
        paths below it, here and in all descendants."""
        pathname = Pathname.from_value(pathname)
        segments = pathname.segments
        for key, values in self._cache.get("path_attributes", {}).items():
            if key.segments[: len(segments)] == segments:
                values.pop(name, None)
        self._cache.pop("operations", None)
        for descendant in self._descendants():
            descendant.invalidate_path_attribute(pathname, name)

    def _attribute_changed(self, name: str) -> None:
        self.invalidate_attributes()
        super()._attribute_changed(name)

    # -- cached lookups -----------------------------------------------------

    @property
    def cached_attributes(self) -> dict[str, Any]:
        """The attributes merged over all ancestors.

        Lists are concatenated, for mappings the first key wins and for
        other values the first one set.
        """
        attributes = self._cache.get("attributes")
        if attributes is None:
            attributes = {}
            for ancestor in self.ancestors:
                for item in fields(ancestor):
                    value = getattr(ancestor, item.name)
                    if isinstance(value, list):
                        attributes.setdefault(item.name, []).extend(value)
                    elif isinstance(value, dict):
                        merged = attributes.setdefault(item.name, {})
                        for key, entry in value.items():
                            merged.setdefault(key, entry)
                    elif attributes.get(item.name) is None:
                        attributes[item.name] = value
            self._cache["attributes"] = attributes
        return attributes

    def find_component(self, kind: str, name: Any) -> Any:
        """Return the reusable component of ``kind`` named ``name``.

        Raises:
            InvalidArgumentError: If ``kind`` isn't a component kind.
        """
        table = COMPONENT_TABLES.get(kind)
        if table is None:
            raise InvalidArgumentError(f"unknown component kind: {kind!r}")
        if name is None:
            return None
        return self.cached_attributes[table].get(str(name))

    def find_callback(self, name: Any) -> Callback | Any:
        return self.find_component("callback", name)

    def find_example(self, name: Any) -> Any:
        return self.find_component("example", name)

    def find_header(self, name: Any) -> Any:
        return self.find_component("header", name)

    def find_link(self, name: Any) -> Any:
        return self.find_component("link", name)

    def find_parameter(self, name: Any) -> Any:
        return self.find_component("parameter", name)

    def find_request_body(self, name: Any) -> Any:
        return self.find_component("request_body", name)

    def find_response(self, name: Any) -> Any:
        return self.find_component("response", name)

    def find_schema(self, name: Any) -> Any:
        return self.find_component("schema", name)

    def find_security_scheme(self, name: Any) -> Any:
        return self.find_component("security_scheme", name)

    def find_operation(self, name: Any = None) -> OperationView | None:
        """Return the operation named ``name``.

        Without a name, the one and only operation of this registry is
        returned, or None if there are none or several.
        """
        name = None if name is None else str(name)
        operations = self._cache.setdefault("operations", {})
        if name in operations:
            return operations[name]
        if name:
            operation = self.cached_attributes["operations"].get(name)
        elif len(self.operations) == 1:
            operation = next(iter(self.operations.values()))
        else:
            operation = None
        if operation is None:
            return None
        operations[name] = view = OperationView(operation, self)
        return view

    def path(self, pathname: Any) -> Path | None:
        """Return the own path of ``pathname``."""
        return self.paths.get(Pathname.from_value(pathname))

    def default_value(self, type_: str, *, context: str | None = None) -> Any:
        """Return the type-level default of ``type_`` within ``context``."""
        defaults = self.cached_attributes["defaults"].get(str(type_))
        return None if defaults is None else defaults.value(context)

    @property
    def default_security_requirements(self) -> list[SecurityRequirement]:
        return self.cached_attributes["security_requirements"]

    # -- common path values -------------------------------------------------

    def _cache_path_attribute(self, pathname: Pathname, name: str, compute: Callable[[], Any]) -> Any:
        values = self._cache.setdefault("path_attributes", {}).setdefault(pathname, {})
        if name not in values:
            values[name] = compute()
        return values[name]

    def _path_values(self, pathname: Pathname, name: str) -> Iterator[list[Any]]:
        """Yield, nearest path first, the values of ``name`` per ancestor."""
        for ancestor_pathname in pathname.ancestors:
            yield [
                getattr(path, name)
                for definitions in self.ancestors
                if (path := definitions.path(ancestor_pathname)) is not None
            ]

    def _common_first(self, pathname: Any, name: str) -> Any:
        pathname = Pathname.from_value(pathname or "")

        def compute() -> Any:
            for values in self._path_values(pathname, name):
                for value in values:
                    if value:
                        return value
            return None

        return self._cache_path_attribute(pathname, name, compute)

    def _common_union(self, pathname: Any, name: str) -> dict[Any, Any] | None:
        pathname = Pathname.from_value(pathname or "")

        def compute() -> dict[Any, Any] | None:
            result: dict[Any, Any] = {}
            for values in self._path_values(pathname, name):
                for value in values:
                    for key, entry in value.items():
                        result.setdefault(key, entry)
            return result or None

        return self._cache_path_attribute(pathname, name, compute)

    def _common_concatenated(self, pathname: Any, name: str) -> list[Any] | None:
        pathname = Pathname.from_value(pathname or "")

        def compute() -> list[Any] | None:
            result: list[Any] = []
            for values in self._path_values(pathname, name):
                for value in values:
                    result.extend(value or [])
            return list(dict.fromkeys(result)) or None

        return self._cache_path_attribute(pathname, name, compute)

    def common_description(self, pathname: Any) -> str | None:
        """The description of the nearest path having one."""
        return self._common_first(pathname, "description")

    def common_model(self, pathname: Any) -> type | None:
        return self._common_first(pathname, "model")

    def common_request_body(self, pathname: Any) -> Any:
        return self._common_first(pathname, "request_body")

    def common_servers(self, pathname: Any) -> list[Server] | None:
        return self._common_first(pathname, "servers")

    def common_summary(self, pathname: Any) -> str | None:
        return self._common_first(pathname, "summary")

    def common_parameters(self, pathname: Any) -> dict[str, Any] | None:
        """The parameters of all paths containing ``pathname``, nearer ones
        taking precedence."""
        return self._common_union(pathname, "parameters")

    def common_responses(self, pathname: Any) -> dict[Any, Any] | None:
        return self._common_union(pathname, "responses")

    def common_response(self, pathname: Any, status: Any) -> Any:
        """The common response of ``pathname`` matching ``status``."""
        return match_response(self.common_responses(pathname) or {}, status)

    def common_security_requirements(self, pathname: Any) -> list[SecurityRequirement] | None:
        return self._common_concatenated(pathname, "security_requirements")

    def common_tags(self, pathname: Any) -> list[str] | None:
        return self._common_concatenated(pathname, "tags")

    # -- documents ----------------------------------------------------------

    def openapi_document(self, version: Any = None) -> dict[str, Any]:
        """Return the OpenAPI document for ``version``.

        ``version`` defaults to OpenAPI 2.0.

        Raises:
            InvalidArgumentError: If ``version`` isn't supported.
        """
        from archespec.domain.services.openapi_generator import OpenAPIGenerator

        return OpenAPIGenerator(self).generate(version)

    def json_schema_document(self, name: str) -> dict[str, Any] | None:
        """Return the JSON Schema document of the schema ``name``, or None."""
        from archespec.domain.services.json_schema_generator import JSONSchemaGenerator

        return JSONSchemaGenerator(self).generate(name)


__all__ = ["COMPONENT_TABLES", "Definitions"]
