# src/archespec/domain/value_objects/pathname.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Relative path names.

Purpose:
    Segment-based value type used to key paths and operations and to walk
    path ancestors when looking up shared path defaults.

Layer:
    domain/value_objects
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_SLASHES_ONLY = re.compile(r"\A/+\Z")


@dataclass(frozen=True)
class Pathname:
    """A relative path name such as ``/foos/{id}``.

    The root pathname has no segments and renders as ``/``.
    """

    segments: tuple[str, ...] = ()

    @classmethod
    def of(cls, *parts: Any) -> Pathname:
        """Build a pathname from path strings, each may contain slashes."""
        segments: list[str] = []
        for part in parts:
            text = str(part).removeprefix("/")
            segments.extend(text.split("/") if text else [""])
        return cls(tuple(segments))

    @classmethod
    def from_value(cls, value: Any) -> Pathname:
        """Transform ``value`` to a pathname.

        ``None``, ``""`` and strings of slashes only denote the root, except
        that a string of two or more slashes keeps one empty segment.
        """
        if isinstance(value, Pathname):
            return value
        if value is None:
            return cls()
        text = str(value)
        if _SLASHES_ONLY.match(text):
            text = text[1:]
        return cls.of(text) if text else cls()

    def __add__(self, other: Any) -> Pathname:
        if other is None:
            return self
        return Pathname(self.segments + Pathname.from_value(other).segments)

    @property
    def ancestors(self) -> list[Pathname]:
        """The pathname itself followed by all parents down to the root."""
        return [Pathname(self.segments[:i]) for i in range(len(self.segments), -1, -1)]

    def __str__(self) -> str:
        if not self.segments:
            return "/"
        parts = []
        for index, segment in enumerate(self.segments):
            parts.append("//" if index == 0 and not segment else f"/{segment}")
        return "".join(parts)


__all__ = ["Pathname"]
