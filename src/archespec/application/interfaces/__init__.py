# src/archespec/application/interfaces/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Ports consumed by the runtime pipelines."""
