# src/archespec/domain/enums/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Enumerations."""
