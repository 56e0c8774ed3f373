# tests/unit/domain/services/test_json_schema_generator.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import pytest

from archespec.domain.exceptions.meta import UnresolvedReferenceError
from archespec.domain.meta.definitions import Definitions


def _definitions() -> Definitions:
    definitions = Definitions()
    definitions.add_schema(
        "Order",
        existence=True,
        properties={
            "customer": {"schema": "Customer"},
            "items": {"type": "array", "items": {"schema": "Item"}},
        },
    )
    definitions.add_schema("Customer", properties={"name": {"type": "string", "existence": True}})
    definitions.add_schema("Item", properties={"product": {"schema": "Product"}})
    definitions.add_schema("Product", type="string")
    definitions.add_schema("Unrelated", type="integer")
    return definitions


def test_document_embeds_every_reachable_schema() -> None:
    document = _definitions().json_schema_document("Order")

    assert document["type"] == "object"
    assert document["properties"]["customer"] == {"$ref": "#/definitions/Customer"}
    assert document["properties"]["items"]["items"] == {"$ref": "#/definitions/Item"}
    assert list(document["definitions"]) == ["Customer", "Item", "Product"]
    assert document["definitions"]["Customer"]["required"] == ["name"]


def test_schema_without_references_has_no_definitions() -> None:
    assert _definitions().json_schema_document("Product") == {"type": ["string", "null"]}


def test_unknown_schema_gives_none() -> None:
    assert _definitions().json_schema_document("Missing") is None


def test_missing_referenced_schema_is_an_error() -> None:
    definitions = _definitions()
    definitions.add_schema("Invoice", properties={"payer": {"schema": "Missing"}})

    with pytest.raises(UnresolvedReferenceError, match="'Missing'"):
        definitions.json_schema_document("Invoice")
