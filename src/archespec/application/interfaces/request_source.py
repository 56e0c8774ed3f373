# src/archespec/application/interfaces/request_source.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Application-level request source interface.

Synopsis:
    The runtime pipeline doesn't depend on a web framework. Whatever serves
    HTTP hands the parts of a request the pipeline reads through this
    protocol: the headers, the parsed query string and the media type of
    the request body.

Layer:
    application/interfaces
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


class RequestSource(Protocol):
    """Read-only view of an incoming request."""

    @property
    def headers(self) -> Mapping[str, str]:
        """Request headers. Lookups should be case-insensitive."""
        ...

    @property
    def query_parameters(self) -> Mapping[str, Any]:
        """The parsed query string."""
        ...

    @property
    def media_type(self) -> str | None:
        """The media type of the request body, e.g. ``application/json``."""
        ...


@dataclass(frozen=True)
class StaticRequest:
    """A plain ``RequestSource``, e.g. for tests and offline processing."""

    headers: Mapping[str, str] = field(default_factory=dict)
    query_parameters: Mapping[str, Any] = field(default_factory=dict)
    media_type: str | None = None


__all__ = ["RequestSource", "StaticRequest"]
