# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for SchoolDesk.

This package contains domain services that encapsulate business logic.
Each domain module validates input locally and talks to the backend
through the shared ApiClient.

Domains:
    academic_year: Academic year rules, CRUD and the add/edit form.
    attendance: Marking attendance for a class section.
    auth: Login and logout.
    bulk: CSV onboarding of students and teachers.
    fees: Fee collection for accountants.
    filters: School, branch, year and class selector options.
    master: Branches, classes, subjects, teachers, students, fee structures.
    super_admin: Platform analytics and administration.
"""
