# src/archespec/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""archespec: describe an API once, derive documents and runtime validation.

Purpose:
    Root package. Layers live in ``domain``, ``application``,
    ``infrastructure`` and ``config``.
"""

__version__ = "0.1.0"
