# src/archespec/domain/meta/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""API description models and the definitions registry."""
