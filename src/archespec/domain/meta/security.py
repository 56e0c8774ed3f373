# src/archespec/domain/meta/security.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Security schemes and security requirements.

Purpose:
    Describe how an API is secured. Scheme types unsupported by a target
    OpenAPI version render as None and are left out of the document.

Layer:
    domain/meta
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from archespec.domain.exceptions.meta import InvalidValueError
from archespec.domain.meta.model import Extensible, check_value, coerce_map, presence
from archespec.domain.value_objects.openapi_version import V3_0, V3_1, V3_2, OpenAPIVersion

OAUTH_FLOW_NAMES = (
    "authorization_code",
    "client_credentials",
    "device_authorization",
    "implicit",
    "password",
)


def _camelize(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


@dataclass(eq=False, kw_only=True)
class OAuthFlow(Extensible):
    """An OAuth flow. ``scopes`` maps scope names to descriptions."""

    authorization_url: str | None = None
    token_url: str | None = None
    refresh_url: str | None = None
    scopes: dict[str, str] = field(default_factory=dict)

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        return self._with_openapi_extensions(
            {
                "authorizationUrl": self.authorization_url,
                "tokenUrl": self.token_url,
                "refreshUrl": self.refresh_url if version.major > 2 else None,
                "scopes": {name: description or "" for name, description in self.scopes.items()},
            }
        )


@dataclass(eq=False, kw_only=True)
class SecurityScheme(Extensible):
    """Base class of security schemes. ``deprecated`` is rendered from 3.2."""

    TYPE: ClassVar[str]

    description: str | None = None
    deprecated: bool = False

    def _base_fields(self, type_: str, version: OpenAPIVersion) -> dict[str, Any]:
        return {
            "type": type_,
            "description": self.description,
            "deprecated": presence(self.deprecated) if version >= V3_2 else None,
        }

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any] | None:  # pragma: no cover
        raise NotImplementedError


@dataclass(eq=False, kw_only=True)
class APIKeySecurityScheme(SecurityScheme):
    TYPE: ClassVar[str] = "api_key"

    name: str | None = None
    in_: str | None = None

    def __post_init__(self) -> None:
        if self.in_ is not None:
            check_value("in", self.in_, ("cookie", "header", "query"))
        super().__post_init__()

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        return self._with_openapi_extensions(
            {**self._base_fields("apiKey", version), "name": self.name, "in": self.in_}
        )


@dataclass(eq=False, kw_only=True)
class BasicSecurityScheme(SecurityScheme):
    TYPE: ClassVar[str] = "basic"

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        if version.major == 2:
            return self._with_openapi_extensions(self._base_fields("basic", version))
        return self._with_openapi_extensions({**self._base_fields("http", version), "scheme": "basic"})


@dataclass(eq=False, kw_only=True)
class BearerSecurityScheme(SecurityScheme):
    """HTTP bearer authentication, OpenAPI 3.0 and higher."""

    TYPE: ClassVar[str] = "bearer"

    bearer_format: str | None = None

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any] | None:
        version = OpenAPIVersion.from_value(version)
        if version < V3_0:
            return None
        return self._with_openapi_extensions(
            {**self._base_fields("http", version), "scheme": "bearer", "bearerFormat": self.bearer_format}
        )


@dataclass(eq=False, kw_only=True)
class OAuth2SecurityScheme(SecurityScheme):
    """OAuth 2.0.

    OpenAPI 2.0 describes a single flow only. ``device_authorization`` and
    ``oauth2_metadata_url`` are rendered from 3.2.
    """

    TYPE: ClassVar[str] = "oauth2"

    oauth_flows: dict[str, OAuthFlow] = field(default_factory=dict)
    oauth2_metadata_url: str | None = None

    def __post_init__(self) -> None:
        for name in self.oauth_flows:
            check_value("oauth flow", name, OAUTH_FLOW_NAMES)
        self.oauth_flows = coerce_map(self.oauth_flows, OAuthFlow)
        super().__post_init__()

    def add_oauth_flow(self, name: str, **keywords: Any) -> OAuthFlow:
        check_value("oauth flow", name, OAUTH_FLOW_NAMES)
        with self._modifying("oauth_flows"):
            self.oauth_flows[name] = flow = OAuthFlow(**keywords)
        return flow

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        flows = dict(self.oauth_flows)
        if version < V3_2:
            flows.pop("device_authorization", None)
        result = self._base_fields("oauth2", version)
        if version >= V3_0:
            result["flows"] = presence({_camelize(k): v.to_openapi(version) for k, v in flows.items()})
            result["oauth2MetadataUrl"] = self.oauth2_metadata_url if version >= V3_2 else None
        elif len(flows) == 1:
            name, flow = next(iter(flows.items()))
            result["flow"] = name
            result.update(flow.to_openapi(version))
        return self._with_openapi_extensions(result)


@dataclass(eq=False, kw_only=True)
class OpenIDConnectSecurityScheme(SecurityScheme):
    """OpenID Connect, OpenAPI 3.0 and higher."""

    TYPE: ClassVar[str] = "open_id_connect"

    open_id_connect_url: str | None = None

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any] | None:
        version = OpenAPIVersion.from_value(version)
        if version < V3_0:
            return None
        return self._with_openapi_extensions(
            {**self._base_fields("openIdConnect", version), "openIdConnectUrl": self.open_id_connect_url}
        )


@dataclass(eq=False, kw_only=True)
class MutualTLSSecurityScheme(SecurityScheme):
    """Mutual TLS, OpenAPI 3.1 and higher."""

    TYPE: ClassVar[str] = "mutual_tls"

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any] | None:
        version = OpenAPIVersion.from_value(version)
        if version < V3_1:
            return None
        return self._with_openapi_extensions(self._base_fields("mutualTLS", version))


SECURITY_SCHEME_TYPES: dict[str, type[SecurityScheme]] = {
    "api_key": APIKeySecurityScheme,
    "basic": BasicSecurityScheme,
    "http_basic": BasicSecurityScheme,
    "bearer": BearerSecurityScheme,
    "http_bearer": BearerSecurityScheme,
    "oauth2": OAuth2SecurityScheme,
    "open_id_connect": OpenIDConnectSecurityScheme,
    "mutual_tls": MutualTLSSecurityScheme,
}


def new_security_scheme(**keywords: Any) -> SecurityScheme:
    """Create a security scheme selected by the ``type`` keyword.

    ``type`` is one of ``api_key``, ``basic``, ``bearer``, ``oauth2``,
    ``open_id_connect`` and ``mutual_tls``. ``in`` may be passed for API keys.

    Raises:
        InvalidValueError: If ``type`` isn't supported.
    """
    type_ = keywords.pop("type", None)
    scheme_class = SECURITY_SCHEME_TYPES.get(str(type_))
    if scheme_class is None:
        raise InvalidValueError(
            "type",
            type_,
            valid_values=["api_key", "basic", "bearer", "oauth2", "open_id_connect", "mutual_tls"],
        )
    if "in" in keywords:
        keywords["in_"] = keywords.pop("in")
    return scheme_class(**keywords)


@dataclass(eq=False, kw_only=True)
class SecurityRequirement(Extensible):
    """Security scheme names mapped to the scopes they require."""

    schemes: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, value: Any) -> SecurityRequirement:
        if isinstance(value, SecurityRequirement):
            return value
        if isinstance(value, Mapping) and "schemes" in value:
            return cls(**value)
        if isinstance(value, Mapping):
            return cls(schemes={str(k): list(v or []) for k, v in value.items()})
        return cls(schemes={str(value): []})

    def to_openapi(self, *_: Any) -> dict[str, list[str]]:
        return {name: list(scopes) for name, scopes in self.schemes.items()}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SecurityRequirement) and other.schemes == self.schemes

    def __hash__(self) -> int:
        return hash(tuple((k, tuple(v)) for k, v in sorted(self.schemes.items())))


__all__ = [
    "OAUTH_FLOW_NAMES",
    "APIKeySecurityScheme",
    "BasicSecurityScheme",
    "BearerSecurityScheme",
    "MutualTLSSecurityScheme",
    "OAuth2SecurityScheme",
    "OAuthFlow",
    "OpenIDConnectSecurityScheme",
    "SecurityRequirement",
    "SecurityScheme",
    "new_security_scheme",
]
