# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models for SchoolDesk API payloads.

Submodules:
    academic_year: Academic year records, drafts and requests.
    master: Branches, classes, subjects, teachers, students, fee structures.
    user: Role-tagged signed-in user records.
    fees: Accountant fee collection.
    attendance: Attendance marking.
    bulk: CSV bulk upload results.
    super_admin: Platform dashboard and management.
"""
