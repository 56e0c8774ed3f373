# src/archespec/domain/services/content_negotiation.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Content negotiation.

Purpose:
    Select the content of a response matching the media ranges a client
    accepts.

Layer:
    domain/services

Notes:
    - Ranges are tried in the order given, which is the client's order of
      preference. The first range matching any content wins and, among the
      contents it matches, the first one in registration order is selected.
    - Not finding a content isn't an error. Callers decide how to respond,
      e.g. with 406.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from archespec.domain.meta.content import ContentView
from archespec.domain.meta.response import ResponseView
from archespec.domain.value_objects.media import MediaRange, MediaType


def negotiate_content(
    response: ResponseView, media_ranges: Iterable[Any]
) -> tuple[MediaType, ContentView] | None:
    """Return the media type and content matching ``media_ranges``.

    Values that aren't valid media ranges are ignored.

    Returns:
        The selected media type and content, or None if no content matches.
    """
    contents = response.contents
    for value in media_ranges:
        media_range = MediaRange.try_from(value)
        if media_range is None:
            continue
        for media_type, content in contents.items():
            if media_range.match(media_type):
                return media_type, content
    return None


def parse_accept(header: str | None) -> list[MediaRange]:
    """Parse an ``Accept`` header into media ranges by descending quality.

    Ranges of equal quality keep the order of the header. Ranges with a
    quality of 0 and unparsable entries are dropped.
    """
    if not header:
        return []
    weighted: list[tuple[float, MediaRange]] = []
    for entry in header.split(","):
        value, *params = (part.strip() for part in entry.split(";"))
        media_range = MediaRange.try_from(value)
        if media_range is None:
            continue
        quality = 1.0
        for param in params:
            key, _, raw = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(raw)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((quality, media_range))
    weighted.sort(key=lambda item: -item[0])
    return [media_range for _, media_range in weighted]


__all__ = ["negotiate_content", "parse_accept"]
