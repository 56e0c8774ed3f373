# src/archespec/domain/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Domain layer: the API description model and pure services."""
