# src/archespec/infrastructure/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Infrastructure layer: process-level concerns such as logging."""
