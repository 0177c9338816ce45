# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fee collection domain package."""

from src.domains.fees.service import (
    FeeCollectionService,
    FeeServiceError,
    FeeTotals,
    FeeValidationError,
)

__all__ = [
    "FeeCollectionService",
    "FeeServiceError",
    "FeeTotals",
    "FeeValidationError",
]
