# tests/unit/domain/value_objects/test_pathname.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
from __future__ import annotations

from archespec.domain.value_objects.pathname import Pathname


def test_root_pathname() -> None:
    for value in (None, "", "/"):
        assert Pathname.from_value(value) == Pathname()
    assert str(Pathname()) == "/"


def test_pathname_segments_and_rendering() -> None:
    pathname = Pathname.from_value("/foos/{id}")

    assert pathname.segments == ("foos", "{id}")
    assert str(pathname) == "/foos/{id}"
    assert Pathname.from_value("foos/{id}") == pathname


def test_pathname_concatenation() -> None:
    assert Pathname.from_value("/foos") + "/{id}" == Pathname.from_value("/foos/{id}")
    assert Pathname() + "foos" == Pathname.from_value("/foos")
    assert Pathname.from_value("/foos") + None == Pathname.from_value("/foos")


def test_pathname_ancestors_nearest_first() -> None:
    ancestors = Pathname.from_value("/foos/bar").ancestors

    assert [str(p) for p in ancestors] == ["/foos/bar", "/foos", "/"]
