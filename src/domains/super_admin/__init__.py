# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Super-admin platform domain package."""

from src.domains.super_admin.service import (
    PlatformRecordNotFoundError,
    SuperAdminService,
    SuperAdminServiceError,
)

__all__ = [
    "SuperAdminService",
    "SuperAdminServiceError",
    "PlatformRecordNotFoundError",
]
