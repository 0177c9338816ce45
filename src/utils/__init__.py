# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for the SchoolDesk client.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Calendar date parsing and month arithmetic
"""

from src.utils.datetime import format_date, parse_date, today, whole_months_between
from src.utils.logging import bind_context, clear_context, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "bind_context",
    "clear_context",
    # Datetime
    "today",
    "parse_date",
    "format_date",
    "whole_months_between",
]
