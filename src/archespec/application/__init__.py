# src/archespec/application/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Application layer: runtime pipelines and use cases."""
