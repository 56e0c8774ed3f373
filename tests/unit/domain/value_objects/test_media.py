# tests/unit/domain/value_objects/test_media.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for media types and media ranges."""

from __future__ import annotations

from itertools import permutations

import pytest

from archespec.domain.exceptions import InvalidArgumentError
from archespec.domain.value_objects.media import MediaRange, MediaType


def _ranges(*values: str) -> list[MediaRange]:
    return [MediaRange.from_value(value) for value in values]


# --------------------------------------------------------------------------- #
# MediaType                                                                   #
# --------------------------------------------------------------------------- #


def test_media_type_is_case_insensitive() -> None:
    assert MediaType.from_value("Application/JSON") == MediaType.APPLICATION_JSON
    assert str(MediaType.from_value("TEXT/Plain")) == "text/plain"


def test_media_type_is_json() -> None:
    assert MediaType.from_value("application/json").is_json
    assert MediaType.from_value("application/problem+json").is_json
    assert not MediaType.from_value("application/json-seq").is_json
    assert not MediaType.TEXT_PLAIN.is_json


def test_media_type_from_value_rejects_garbage() -> None:
    assert MediaType.try_from("garbage") is None
    assert MediaType.try_from(None) is None
    with pytest.raises(InvalidArgumentError):
        MediaType.from_value("garbage")


# --------------------------------------------------------------------------- #
# MediaRange                                                                  #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    ("value", "priority"),
    [("text/plain", 1), ("text/*", 2), ("*/plain", 3), ("*/*", 4)],
)
def test_media_range_priority(value: str, priority: int) -> None:
    assert MediaRange.from_value(value).priority == priority


def test_media_range_match_and_cover() -> None:
    text_any = MediaRange.from_value("text/*")

    assert text_any.match("text/plain")
    assert text_any.match("TEXT/HTML")
    assert not text_any.match("application/json")
    assert text_any.cover("text/plain")
    assert not text_any.cover("*/*")
    assert MediaRange.ALL.cover("text/*")
    assert not MediaRange.APPLICATION_JSON.match(None)


def test_media_ranges_sort_by_priority_then_name() -> None:
    ranges = sorted(_ranges("*/*", "text/*", "text/plain", "application/json"))

    assert [str(r) for r in ranges] == ["application/json", "text/plain", "text/*", "*/*"]


def test_reduce_drops_covered_ranges() -> None:
    assert MediaRange.reduce(["text/json", "text/plain", "text/*"]) == _ranges("text/*")
    assert MediaRange.reduce(["*/*", "text/*", "text/json"]) == _ranges("*/*")


def test_reduce_keeps_disjoint_ranges_sorted() -> None:
    reduced = MediaRange.reduce(["text/plain", "application/json", "text/plain"])

    assert reduced == _ranges("application/json", "text/plain")


@pytest.mark.parametrize(
    "values",
    [
        ["text/json", "text/plain", "text/*"],
        ["*/*", "text/*", "text/json"],
        ["application/json", "text/*", "text/plain", "application/xml"],
    ],
)
def test_reduce_is_independent_of_input_order(values: list[str]) -> None:
    expected = MediaRange.reduce(values)

    for permutation in permutations(values):
        assert MediaRange.reduce(permutation) == expected
