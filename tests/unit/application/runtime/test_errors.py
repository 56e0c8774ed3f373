# tests/unit/application/runtime/test_errors.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for the validation error collection."""

from __future__ import annotations

from archespec.application.runtime.errors import BASE, Errors


def test_errors_added_to_base_within_nested_are_attributed_to_the_nesting() -> None:
    errors = Errors()
    with errors.nested("foo"):
        errors.add(BASE, "is invalid")
        with errors.nested("bar"):
            errors.add(BASE, "can't be blank")

    assert errors.to_dict() == {"foo": ["is invalid"], "foo.bar": ["can't be blank"]}
    assert errors.added("foo.bar", "can't be blank")


def test_base_errors_outside_nesting_stay_on_base() -> None:
    errors = Errors()
    errors.add(BASE, "'x' isn't allowed")

    assert errors.messages_for(BASE) == ["'x' isn't allowed"]
    assert errors.full_messages == ["'x' isn't allowed"]


def test_merge_quotes_the_attributes_of_the_nested_errors() -> None:
    nested = Errors()
    nested.add("bar", "can't be blank")
    nested.add(BASE, "is invalid")

    errors = Errors()
    with errors.nested("foo"):
        errors.merge(nested)

    assert errors.messages_for("foo") == ["'bar' can't be blank", "is invalid"]
    assert errors.full_messages == ["foo 'bar' can't be blank", "foo is invalid"]


def test_clear_and_empty() -> None:
    errors = Errors()
    assert errors.empty
    assert not errors

    errors.add("foo", "is invalid")
    assert len(errors) == 1
    assert bool(errors)

    errors.clear()
    assert errors.empty
