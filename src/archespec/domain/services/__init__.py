# src/archespec/domain/services/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Document generators and content negotiation."""
