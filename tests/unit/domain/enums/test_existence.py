# tests/unit/domain/enums/test_existence.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for existence levels."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import pairwise

import pytest

from archespec.domain.enums.existence import Existence
from archespec.domain.exceptions import InvalidValueError


@dataclass
class _Value:
    null: bool = False
    empty: bool = False


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, Existence.PRESENT),
        (False, Existence.ALLOW_OMITTED),
        (None, Existence.ALLOW_OMITTED),
        ("present", Existence.PRESENT),
        ("allow_empty", Existence.ALLOW_EMPTY),
        ("allow_nil", Existence.ALLOW_NIL),
        ("allow_null", Existence.ALLOW_NIL),
        ("ALLOW_OMITTED", Existence.ALLOW_OMITTED),
    ],
)
def test_from_value(value: object, expected: Existence) -> None:
    assert Existence.from_value(value) is expected


def test_from_value_rejects_unknown_names() -> None:
    with pytest.raises(InvalidValueError, match="existence must be one of"):
        Existence.from_value("sometimes")


def test_levels_are_totally_ordered() -> None:
    levels = sorted(Existence)

    assert levels == [Existence.ALLOW_OMITTED, Existence.ALLOW_NIL, Existence.ALLOW_EMPTY, Existence.PRESENT]


def test_higher_levels_never_grant_more_freedom() -> None:
    for lower, higher in pairwise(sorted(Existence)):
        assert lower.nullable >= higher.nullable
        assert lower.omittable >= higher.omittable
        assert lower.required <= higher.required


def test_flags() -> None:
    assert Existence.ALLOW_OMITTED.omittable and Existence.ALLOW_OMITTED.nullable
    assert not Existence.ALLOW_OMITTED.required
    assert Existence.ALLOW_NIL.nullable and not Existence.ALLOW_NIL.omittable
    assert not Existence.ALLOW_EMPTY.nullable and Existence.ALLOW_EMPTY.required


def test_reach() -> None:
    null, empty, present = _Value(null=True, empty=True), _Value(empty=True), _Value()

    assert Existence.ALLOW_NIL.reach(null)
    assert not Existence.ALLOW_EMPTY.reach(null)
    assert Existence.ALLOW_EMPTY.reach(empty)
    assert not Existence.PRESENT.reach(empty)
    assert Existence.PRESENT.reach(present)
