# src/archespec/infrastructure/logging/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Structured logging."""
