# src/archespec/application/runtime/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Runtime pipeline package export."""

from __future__ import annotations

from .errors import BASE, Errors, ValidationError
from .json_values import (
    JsonArray,
    JsonBoolean,
    JsonInteger,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    wrap_json,
)
from .model import Model, Nestable
from .parameters import Parameters
from .response import ResponseSerializer

__all__ = [
    "BASE",
    "Errors",
    "JsonArray",
    "JsonBoolean",
    "JsonInteger",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonValue",
    "Model",
    "Nestable",
    "Parameters",
    "ResponseSerializer",
    "ValidationError",
    "wrap_json",
]
