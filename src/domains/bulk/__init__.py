# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bulk CSV onboarding domain package."""

from src.domains.bulk.service import (
    REQUIRED_COLUMNS,
    BulkUploadError,
    BulkUploadService,
    InvalidUploadFileError,
    check_csv,
)

__all__ = [
    "BulkUploadService",
    "BulkUploadError",
    "InvalidUploadFileError",
    "REQUIRED_COLUMNS",
    "check_csv",
]
