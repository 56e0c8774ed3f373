# src/archespec/domain/meta/defaults.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Type-level default values.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from archespec.domain.meta.model import MetaModel


@dataclass(eq=False, kw_only=True)
class Defaults(MetaModel):
    """The default values of a schema type within requests and responses.

    Applies to every schema of the type that has no default of its own, so
    that e.g. all arrays default to ``[]`` in responses.
    """

    within_requests: Any = None
    within_responses: Any = None

    def value(self, context: str | None = None) -> Any:
        """Return the default value within ``context``."""
        if context == "request":
            return self.within_requests
        if context == "response":
            return self.within_responses
        return None


__all__ = ["Defaults"]
