# src/archespec/domain/value_objects/media.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Media types and media ranges.

Purpose:
    Value objects for ``type/subtype`` pairs used as content keys and for
    ``Accept``-style ranges (with ``*`` wildcards) used during content
    negotiation and to summarize ``consumes``/``produces``.

Layer:
    domain/value_objects

Notes:
    - Types and subtypes are compared case-insensitively (stored lowercase).
    - Range priority: 1 exact, 2 subtype wildcard, 3 type wildcard,
      4 both wildcard. Lower numbers are more specific.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from archespec.domain.exceptions.meta import InvalidArgumentError

_NAME = r"[0-9a-zA-Z-]+"
_SUBTYPE = rf"{_NAME}(?:\.{_NAME})?(?:\+{_NAME})?"

_TYPE_PATTERN = re.compile(rf"({_NAME})/({_SUBTYPE})")
_RANGE_PATTERN = re.compile(rf"(\*|{_NAME})/(\*|{_SUBTYPE})")


@dataclass(frozen=True)
class MediaType:
    """A media type such as ``application/json``."""

    type: str
    subtype: str

    APPLICATION_JSON: ClassVar[MediaType]
    APPLICATION_JSON_SEQ: ClassVar[MediaType]
    TEXT_PLAIN: ClassVar[MediaType]

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", self.type.lower())
        object.__setattr__(self, "subtype", self.subtype.lower())

    @classmethod
    def try_from(cls, value: Any) -> MediaType | None:
        """Return a media type for ``value`` or None if it can't be parsed."""
        if isinstance(value, MediaType):
            return value
        if value is None:
            return None
        match = _TYPE_PATTERN.search(str(value))
        return cls(match.group(1), match.group(2)) if match else None

    @classmethod
    def from_value(cls, value: Any) -> MediaType:
        """Return a media type for ``value``.

        Raises:
            InvalidArgumentError: If ``value`` isn't a media type.
        """
        media_type = cls.try_from(value)
        if media_type is None:
            raise InvalidArgumentError(f"invalid media type: {value!r}")
        return media_type

    @property
    def is_json(self) -> bool:
        """True for JSON media types, including ``+json`` suffixes."""
        return (
            self.type in ("application", "text") and self.subtype == "json"
        ) or self.subtype.endswith("+json")

    def __lt__(self, other: MediaType) -> bool:
        return (self.type, self.subtype) < (other.type, other.subtype)

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"


@dataclass(frozen=True)
class MediaRange:
    """A media range such as ``text/*`` or ``*/*``."""

    type: str
    subtype: str

    ALL: ClassVar[MediaRange]
    APPLICATION_JSON: ClassVar[MediaRange]

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", self.type.lower())
        object.__setattr__(self, "subtype", self.subtype.lower())

    @classmethod
    def try_from(cls, value: Any) -> MediaRange | None:
        """Return a media range for ``value`` or None if it can't be parsed."""
        if isinstance(value, MediaRange):
            return value
        if isinstance(value, MediaType):
            return cls(value.type, value.subtype)
        if value is None:
            return None
        match = _RANGE_PATTERN.search(str(value))
        return cls(match.group(1), match.group(2)) if match else None

    @classmethod
    def from_value(cls, value: Any) -> MediaRange:
        """Return a media range for ``value``.

        Raises:
            InvalidArgumentError: If ``value`` isn't a media range.
        """
        media_range = cls.try_from(value)
        if media_range is None:
            raise InvalidArgumentError(f"invalid media range: {value!r}")
        return media_range

    @classmethod
    def reduce(cls, media_ranges: Iterable[Any]) -> list[MediaRange]:
        """Remove ranges covered by another range of the same collection.

        The remaining ranges are returned sorted by priority, type and
        subtype, so the result doesn't depend on the order of the input.
        """
        reduced: list[MediaRange] = []
        for value in media_ranges:
            media_range = cls.from_value(value)
            if any(other.cover(media_range) for other in reduced):
                continue
            reduced = [other for other in reduced if not media_range.cover(other)]
            reduced.append(media_range)
        return sorted(reduced)

    @property
    def priority(self) -> int:
        """Specificity of the range, 1 (exact) to 4 (``*/*``)."""
        return (2 if self.type == "*" else 0) + (1 if self.subtype == "*" else 0) + 1

    def cover(self, other: Any) -> bool:
        """Return True if every media type matched by ``other`` matches this range."""
        if other is None:
            return False
        other = MediaRange.from_value(other)
        return self._match_parts(other.type, other.subtype)

    def match(self, media_type: Any) -> bool:
        """Return True if ``media_type`` lies within this range."""
        if media_type is None:
            return False
        media_type = MediaType.from_value(media_type)
        return self._match_parts(media_type.type, media_type.subtype)

    def _match_parts(self, type_: str, subtype: str) -> bool:
        return (self.type in ("*", type_)) and (self.subtype in ("*", subtype))

    def __lt__(self, other: MediaRange) -> bool:
        return (self.priority, self.type, self.subtype) < (
            other.priority,
            other.type,
            other.subtype,
        )

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"


MediaType.APPLICATION_JSON = MediaType("application", "json")
MediaType.APPLICATION_JSON_SEQ = MediaType("application", "json-seq")
MediaType.TEXT_PLAIN = MediaType("text", "plain")

MediaRange.ALL = MediaRange("*", "*")
MediaRange.APPLICATION_JSON = MediaRange("application", "json")

__all__ = ["MediaRange", "MediaType"]
