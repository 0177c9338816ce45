"""SchoolDesk client.

Typed client and command-line frontend for the SchoolDesk multi-tenant
school-management backend: academic years, master data, fee collection,
attendance, bulk onboarding and super-admin analytics.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
