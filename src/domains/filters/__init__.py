# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Selector options domain package."""

from src.domains.filters.service import (
    FilterOptions,
    FilterOptionsError,
    FilterOptionsService,
)

__all__ = [
    "FilterOptions",
    "FilterOptionsError",
    "FilterOptionsService",
]
