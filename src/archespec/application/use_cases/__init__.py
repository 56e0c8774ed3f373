# src/archespec/application/use_cases/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Use cases."""
