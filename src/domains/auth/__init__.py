# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

Exports:
    AuthService: Login/logout against the backend, backed by the session.
    AuthenticationError: Base authentication failure.
    InvalidCredentialsError: Rejected email/password.
"""

from src.domains.auth.service import (
    AuthenticationError,
    AuthService,
    InvalidCredentialsError,
)

__all__ = [
    "AuthService",
    "AuthenticationError",
    "InvalidCredentialsError",
]
