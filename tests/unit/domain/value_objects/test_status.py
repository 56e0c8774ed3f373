# tests/unit/domain/value_objects/test_status.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for response status keys."""

from __future__ import annotations

import pytest

from archespec.domain.exceptions import InvalidArgumentError
from archespec.domain.value_objects.status import (
    CLIENT_ERROR,
    DEFAULT,
    SUCCESS,
    StatusCode,
    status_from,
)


def test_status_from_accepts_codes_ranges_and_default() -> None:
    assert status_from(200) == StatusCode(200)
    assert status_from("404") == StatusCode(404)
    assert status_from("not_found") == StatusCode(404)
    assert status_from("4XX") is CLIENT_ERROR
    assert status_from("2xx") is SUCCESS
    assert status_from(None) is DEFAULT
    assert status_from("default") is DEFAULT


@pytest.mark.parametrize("value", [99, 600, "teapot!", True])
def test_status_code_rejects_invalid_values(value: object) -> None:
    with pytest.raises(InvalidArgumentError):
        StatusCode.from_value(value)


def test_status_matching() -> None:
    not_found = StatusCode(404)

    assert not_found.match(StatusCode(404))
    assert not not_found.match(StatusCode(400))
    assert CLIENT_ERROR.match(StatusCode(404))
    assert not CLIENT_ERROR.match(StatusCode(500))
    assert DEFAULT.match(StatusCode(500))


def test_statuses_sort_exact_codes_before_ranges_before_default() -> None:
    keys = sorted([DEFAULT, CLIENT_ERROR, StatusCode(404), StatusCode(200)])

    assert [str(key) for key in keys] == ["200", "404", "4XX", "default"]
