# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session storage package."""

from src.infrastructure.session.store import (
    FileSessionStore,
    InMemorySessionStore,
    Session,
    SessionStore,
)

__all__ = [
    "Session",
    "SessionStore",
    "InMemorySessionStore",
    "FileSessionStore",
]
