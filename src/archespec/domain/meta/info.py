# src/archespec/domain/meta/info.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""API metadata: info, contact and license objects.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from archespec.domain.exceptions.meta import MutuallyExclusiveError
from archespec.domain.meta.model import Extensible, coerce
from archespec.domain.value_objects.openapi_version import V3_1, OpenAPIVersion


@dataclass(eq=False, kw_only=True)
class Contact(Extensible):
    name: str | None = None
    url: str | None = None
    email: str | None = None

    def to_openapi(self, *_: Any) -> dict[str, Any]:
        return self._with_openapi_extensions({"name": self.name, "url": self.url, "email": self.email})


@dataclass(eq=False, kw_only=True)
class License(Extensible):
    """The license of an API.

    ``identifier`` (an SPDX expression, rendered from OpenAPI 3.1) and ``url``
    are mutually exclusive.
    """

    name: str | None = None
    identifier: str | None = None
    url: str | None = None

    def __post_init__(self) -> None:
        self._check_exclusive()
        super().__post_init__()

    def _attribute_changed(self, name: str) -> None:
        if name in ("identifier", "url"):
            self._check_exclusive()

    def _check_exclusive(self) -> None:
        if self.identifier is not None and self.url is not None:
            raise MutuallyExclusiveError("identifier", "url")

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        return self._with_openapi_extensions(
            {
                "name": self.name,
                "identifier": self.identifier if version >= V3_1 else None,
                "url": self.url,
            }
        )


@dataclass(eq=False, kw_only=True)
class Info(Extensible):
    """The info object of an API description."""

    title: str | None = None
    version: str | None = None
    summary: str | None = None
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None

    def __post_init__(self) -> None:
        self.contact = coerce(self.contact, Contact)
        self.license = coerce(self.license, License)
        if self.version is not None:
            self.version = str(self.version)
        super().__post_init__()

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        return self._with_openapi_extensions(
            {
                "title": self.title,
                "version": self.version,
                "summary": self.summary if version >= V3_1 else None,
                "description": self.description,
                "termsOfService": self.terms_of_service,
                "contact": self.contact.to_openapi(version) if self.contact else None,
                "license": self.license.to_openapi(version) if self.license else None,
            }
        )


__all__ = ["Contact", "Info", "License"]
