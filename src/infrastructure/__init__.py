# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Infrastructure layer for external service integrations.

This package contains:
- api: HTTP client for the SchoolDesk backend and the fetch-with-fallback helper
- session: Token/user/school session storage
- fallback: Bundled demo data
"""
