# src/archespec/domain/meta/model.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Base class of all description models.

Purpose:
    Provide the mutation contract shared by schemas, parameters, responses,
    operations and the definitions registry:

    * Every attribute assignment and every ``add_*`` call goes through one
      guarded path that fails once the model has been frozen.
    * After construction, each change notifies ``_attribute_changed`` so that
      owners of derived caches can invalidate them.
    * ``freeze_attributes()`` freezes the model and everything it holds.

Layer:
    domain/meta

Notes:
    Subclasses are keyword-only dataclasses (``eq=False`` keeps identity
    semantics, models are graph nodes, not values). Their ``__post_init__``
    normalizes the raw keyword values and must call ``super().__post_init__()``
    last.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, TypeVar

from archespec.domain.exceptions.meta import (
    FrozenAttributesError,
    InvalidArgumentError,
    InvalidValueError,
)

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions

M = TypeVar("M", bound="MetaModel")


class MetaModel:
    """Mutation-guarded description model."""

    _frozen: bool = False
    _initialized: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "_initialized", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        if self._frozen:
            raise FrozenAttributesError(self)
        object.__setattr__(self, name, value)
        if self._initialized:
            self._attribute_changed(name)

    @contextmanager
    def _modifying(self, name: str) -> Iterator[None]:
        """Guard an in-place change of the collection attribute ``name``."""
        if self._frozen:
            raise FrozenAttributesError(self)
        yield
        self._attribute_changed(name)

    def _attribute_changed(self, name: str) -> None:
        """Invoked whenever an attribute has been changed."""

    @property
    def frozen(self) -> bool:
        """True once ``freeze_attributes`` has been called."""
        return self._frozen

    def freeze_attributes(self) -> None:
        """Freeze this model and every model it holds."""
        object.__setattr__(self, "_frozen", True)
        for item in fields(self):  # type: ignore[arg-type]
            _freeze(getattr(self, item.name))

    @property
    def is_reference(self) -> bool:
        return False

    def resolve(self, definitions: Definitions | None, *, deep: bool = True) -> Any:
        """Return the concrete model, which is the model itself."""
        return self

    def resolve_lazily(self, definitions: Definitions | None) -> Any:
        return self


def _freeze(value: Any) -> None:
    if isinstance(value, MetaModel):
        value.freeze_attributes()
    elif isinstance(value, Mapping):
        for item in value.values():
            _freeze(item)
    elif isinstance(value, list):
        for item in value:
            _freeze(item)


@dataclass(eq=False, kw_only=True)
class Extensible(MetaModel):
    """Model carrying ``x-*`` specification extensions."""

    openapi_extensions: dict[str, Any] = field(default_factory=dict)

    def add_openapi_extension(self, name: str, value: Any) -> None:
        with self._modifying("openapi_extensions"):
            self.openapi_extensions[str(name)] = value

    def _with_openapi_extensions(self, result: dict[str, Any]) -> dict[str, Any]:
        """Merge the extensions into ``result`` and drop ``None`` values."""
        for key, value in self.openapi_extensions.items():
            key = str(key)
            result[key if key.startswith("x-") else f"x-{key}"] = value
        return compact(result)


def compact(result: dict[str, Any]) -> dict[str, Any]:
    """Return ``result`` without keys whose value is None."""
    return {key: value for key, value in result.items() if value is not None}


def presence(value: Any) -> Any:
    """Return ``value`` or None if it is blank (empty or False)."""
    return value or None


def coerce(value: Any, cls: Callable[..., M]) -> M | None:
    """Build a model from a mapping of keywords, pass models through."""
    if value is None or isinstance(value, MetaModel):
        return value
    if isinstance(value, Mapping):
        return cls(**value)
    raise InvalidArgumentError(f"can't build {getattr(cls, '__name__', cls)} from {value!r}")


def coerce_map(values: Mapping[Any, Any] | None, cls: Callable[..., M]) -> dict[str, M]:
    """Build a name-to-model map, keys are stringified."""
    return {str(key): coerce(value, cls) for key, value in (values or {}).items()}  # type: ignore[misc]


def check_value(name: str, value: Any, valid_values: tuple[Any, ...]) -> Any:
    """Raise InvalidValueError unless ``value`` is one of ``valid_values``."""
    if value not in valid_values:
        raise InvalidValueError(name, value, valid_values=valid_values)
    return value


@dataclass(eq=False, kw_only=True)
class ExternalDocumentation(Extensible):
    """A reference to external documentation."""

    url: str | None = None
    description: str | None = None

    def to_openapi(self, *_: Any) -> dict[str, Any]:
        return self._with_openapi_extensions({"url": self.url, "description": self.description})


__all__ = [
    "Extensible",
    "ExternalDocumentation",
    "MetaModel",
    "check_value",
    "coerce",
    "coerce_map",
    "compact",
    "presence",
]
