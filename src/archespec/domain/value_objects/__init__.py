# src/archespec/domain/value_objects/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Value objects."""
