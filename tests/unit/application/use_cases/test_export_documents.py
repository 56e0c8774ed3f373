# tests/unit/application/use_cases/test_export_documents.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for the document export use case."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from archespec.application.use_cases.export_documents import ExportDocumentRequest, ExportDocuments
from archespec.domain.exceptions.meta import InvalidArgumentError, MutuallyExclusiveError
from archespec.domain.meta.definitions import Definitions


def _definitions() -> Definitions:
    definitions = Definitions(info={"title": "Foo API", "version": "1"})
    definitions.add_schema("Foo", type="object", properties={"id": {"type": "integer", "existence": True}})
    definitions.add_operation("get_foo", path="/foos/{id}", responses={200: {"schema": "Foo"}})
    return definitions


def test_exports_the_openapi_document_of_the_configured_version() -> None:
    result = ExportDocuments(_definitions()).execute(ExportDocumentRequest())

    assert result.kind == "openapi"
    assert result.path is None
    assert result.text.endswith("\n")
    assert "\n" not in result.text.rstrip("\n")
    assert json.loads(result.text)["openapi"] == "3.1.1"


def test_exports_a_given_version_with_indentation() -> None:
    result = ExportDocuments(_definitions()).execute(ExportDocumentRequest(openapi_version="2.0", indent=2))

    document = json.loads(result.text)
    assert document["swagger"] == "2.0"
    assert result.text.startswith('{\n  "')


def test_version_defaults_to_the_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    from archespec.config.settings import get_settings

    monkeypatch.setenv("ARCHESPEC_OPENAPI_VERSION", "3.0")
    get_settings.cache_clear()

    result = ExportDocuments(_definitions()).execute(ExportDocumentRequest())

    assert json.loads(result.text)["openapi"] == "3.0.3"


def test_indentation_defaults_to_the_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    from archespec.config.settings import get_settings

    monkeypatch.setenv("ARCHESPEC_JSON_INDENT", "4")
    get_settings.cache_clear()

    result = ExportDocuments(_definitions()).execute(ExportDocumentRequest())

    assert result.text.startswith('{\n    "')


def test_exports_the_json_schema_document_of_a_schema() -> None:
    result = ExportDocuments(_definitions()).execute(ExportDocumentRequest(schema_name="Foo", sort_keys=True))

    assert result.kind == "json_schema"
    assert json.loads(result.text)["required"] == ["id"]


def test_unknown_schema_raises() -> None:
    with pytest.raises(InvalidArgumentError, match="schema not found"):
        ExportDocuments(_definitions()).execute(ExportDocumentRequest(schema_name="Bar"))


def test_version_and_schema_are_mutually_exclusive() -> None:
    with pytest.raises(MutuallyExclusiveError):
        ExportDocuments(_definitions()).execute(ExportDocumentRequest(openapi_version="3.0", schema_name="Foo"))


def test_unsupported_version_raises() -> None:
    with pytest.raises(InvalidArgumentError):
        ExportDocuments(_definitions()).execute(ExportDocumentRequest(openapi_version="1.2"))


def test_writes_the_document_and_logs(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    out = tmp_path / "build" / "openapi.json"

    with caplog.at_level(logging.INFO, logger="archespec.application.use_cases.export_documents"):
        result = ExportDocuments(_definitions()).execute(ExportDocumentRequest(openapi_version="3.0", out=out))

    assert result.path == out
    assert out.read_text(encoding="utf-8") == result.text
    record = next(r for r in caplog.records if r.getMessage() == "archespec.export_documents.done")
    assert record.kind == "openapi"
    assert record.path == str(out)
