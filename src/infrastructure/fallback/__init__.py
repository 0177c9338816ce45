# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bundled demo data used when fetch fallback is enabled."""

from src.infrastructure.fallback import datasets

__all__ = ["datasets"]
