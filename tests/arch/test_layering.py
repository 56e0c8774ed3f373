# tests/arch/test_layering.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Layering guardrail using the grimp import graph.

This test builds an import graph for the `archespec` package and enforces
a strict layering policy:

    domain         → may depend only on domain
    application    → may depend on {domain, application}
    infrastructure → may depend on {domain, application, infrastructure}

`archespec.config` sits outside the matrix. The application and
infrastructure layers may import it, the domain layer may not.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

import grimp
from grimp import ImportGraph

ROOT_PACKAGE: Final[str] = "archespec"

LAYERS: Final[frozenset[str]] = frozenset({"domain", "application", "infrastructure"})

# Map from top-level "layer" to the set of layers it is allowed to import.
ALLOWED_DEPENDENCIES: Mapping[str, set[str]] = {
    "domain": {"domain"},
    "application": {"domain", "application"},
    "infrastructure": {"domain", "application", "infrastructure"},
}


def _build_graph() -> ImportGraph:
    """Build the import graph for the root package using grimp."""
    return grimp.build_graph(ROOT_PACKAGE)


def _layer_for_module(module_name: str) -> str | None:
    """Infer the logical layer of a module from its first component.

        archespec.domain.*          → "domain"
        archespec.application.*     → "application"
        archespec.infrastructure.*  → "infrastructure"

    Anything else (e.g. archespec.config) returns None and is ignored.
    """
    if not module_name.startswith(f"{ROOT_PACKAGE}."):
        return None

    top = module_name[len(ROOT_PACKAGE) + 1 :].split(".", 1)[0]
    return top if top in LAYERS else None


def _find_layering_violations(graph: ImportGraph) -> list[str]:
    """Scan the graph and return human-readable layering violations."""
    violations: set[str] = set()

    for importer in sorted(graph.modules):
        importer_layer = _layer_for_module(importer)
        if importer_layer is None:
            continue

        allowed_targets = ALLOWED_DEPENDENCIES[importer_layer]
        for imported in graph.find_modules_directly_imported_by(importer):
            imported_layer = _layer_for_module(imported)
            if imported_layer is None:
                # stdlib, third-party and config
                continue

            if imported_layer not in allowed_targets:
                violations.add(
                    f"{importer} ({importer_layer}) -> {imported} ({imported_layer}) "
                    "is not allowed by ALLOWED_DEPENDENCIES"
                )

    return sorted(violations)


def test_layering_respects_the_dependency_matrix() -> None:
    """Ensure that high-level layering rules are respected."""
    graph = _build_graph()
    violations = _find_layering_violations(graph)

    if violations:
        message = "Layering violations detected:\n" + "\n".join(violations)
        raise AssertionError(message)



def test_domain_does_not_read_configuration() -> None:
    """Domain modules receive plain arguments instead of reading settings."""
    graph = _build_graph()
    offenders = sorted(
        importer
        for importer in graph.modules
        if _layer_for_module(importer) == "domain"
        and any(
            imported == f"{ROOT_PACKAGE}.config" or imported.startswith(f"{ROOT_PACKAGE}.config.")
            for imported in graph.find_modules_directly_imported_by(importer)
        )
    )

    assert offenders == []
