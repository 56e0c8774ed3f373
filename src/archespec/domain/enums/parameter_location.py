# src/archespec/domain/enums/parameter_location.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Parameter locations.

Layer:
    domain/enums
"""

from __future__ import annotations

from enum import Enum


class ParameterLocation(str, Enum):
    """Where a parameter is read from."""

    HEADER = "header"
    PATH = "path"
    QUERY = "query"
    QUERYSTRING = "querystring"


__all__ = ["ParameterLocation"]
