# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bundled demo data.

Payloads here mirror what the backend returns (camelCase JSON) so that the
same parsing path handles live and demo data. Every accessor returns a fresh
copy.
"""

import copy
from typing import Any

DEMO_SCHOOL_ID = "default-school-1"

_SCHOOLS: list[dict[str, Any]] = [
    {
        "id": DEMO_SCHOOL_ID,
        "name": "Demo Public School",
        "address": "Demo Address",
        "phone": "+91-9876543210",
        "email": "demo@school.edu",
        "principalName": "Dr. Demo Principal",
    }
]

_BRANCH_TEMPLATES: list[tuple[str, str, str]] = [
    ("main", "Main Campus", "+91-9876543210"),
    ("secondary", "Secondary Campus", "+91-9876543211"),
]

_ACADEMIC_YEARS: list[dict[str, Any]] = [
    {
        "id": "ay-2024-25",
        "name": "2024-25",
        "startDate": "2024-04-01",
        "endDate": "2025-03-31",
        "schoolId": DEMO_SCHOOL_ID,
        "isActive": True,
        "isCurrent": True,
    },
    {
        "id": "ay-2023-24",
        "name": "2023-24",
        "startDate": "2023-04-01",
        "endDate": "2024-03-31",
        "schoolId": DEMO_SCHOOL_ID,
        "isActive": False,
        "isCurrent": False,
    },
    {
        "id": "ay-2022-23",
        "name": "2022-23",
        "startDate": "2022-04-01",
        "endDate": "2023-03-31",
        "schoolId": DEMO_SCHOOL_ID,
        "isActive": False,
        "isCurrent": False,
    },
]

_CLASSES: list[dict[str, Any]] = [
    {"id": "class-1a", "name": "Class 1", "section": "A", "schoolId": DEMO_SCHOOL_ID},
    {"id": "class-2a", "name": "Class 2", "section": "A", "schoolId": DEMO_SCHOOL_ID},
    {"id": "class-5a", "name": "Class 5", "section": "A", "schoolId": DEMO_SCHOOL_ID},
    {"id": "class-10a", "name": "Class 10", "section": "A", "schoolId": DEMO_SCHOOL_ID},
    {"id": "class-12s", "name": "Class 12", "section": "Science", "schoolId": DEMO_SCHOOL_ID},
]

_FEE_STATUS: list[dict[str, Any]] = [
    {
        "id": "1",
        "admissionNumber": "STU001",
        "user": {"firstName": "Rahul", "lastName": "Sharma"},
        "class": "10",
        "section": "A",
        "feeStatus": {
            "totalAmount": 25000,
            "paidAmount": 15000,
            "pendingAmount": 10000,
            "dueDate": "2024-12-15",
            "status": "partial",
        },
        "parent": {"firstName": "Suresh", "lastName": "Sharma", "phone": "9876543210"},
    }
]

_FEE_STRUCTURE: list[dict[str, Any]] = [
    {"id": "1", "name": "Tuition Fee", "amount": 15000, "type": "quarterly", "mandatory": True},
    {"id": "2", "name": "Transport Fee", "amount": 3000, "type": "quarterly", "mandatory": False},
    {"id": "3", "name": "Library Fee", "amount": 1000, "type": "annual", "mandatory": True},
]

_DASHBOARD: dict[str, Any] = {
    "analytics": {
        "overview": {
            "totalSchools": 1,
            "activeSchools": 1,
            "totalUsers": 0,
            "totalRevenue": 0,
            "monthlyRevenue": 0,
        },
        "usersByRole": [],
        "revenueByPlan": [],
    },
    "recentSchools": [
        {
            "id": DEMO_SCHOOL_ID,
            "name": "Demo Public School",
            "location": "Demo Address",
            "principal": "Dr. Demo Principal",
            "email": "demo@school.edu",
            "phone": "+91-9876543210",
            "plan": "Basic",
            "status": "Active",
        }
    ],
    "recentBilling": [],
}


def schools() -> list[dict[str, Any]]:
    return copy.deepcopy(_SCHOOLS)


def branches_for(school_ids: list[str]) -> list[dict[str, Any]]:
    """Default Main/Secondary campuses for each school."""
    return [
        {
            "id": f"{school_id}-branch-{suffix}",
            "name": name,
            "schoolId": school_id,
            "phone": phone,
            "status": "active",
            "isMainBranch": suffix == "main",
        }
        for school_id in school_ids
        for suffix, name, phone in _BRANCH_TEMPLATES
    ]


def academic_years(school_id: str = DEMO_SCHOOL_ID) -> list[dict[str, Any]]:
    years = copy.deepcopy(_ACADEMIC_YEARS)
    for year in years:
        year["schoolId"] = school_id
    return years


def classes(school_id: str = DEMO_SCHOOL_ID) -> list[dict[str, Any]]:
    items = copy.deepcopy(_CLASSES)
    for item in items:
        item["schoolId"] = school_id
    return items


def fee_status() -> list[dict[str, Any]]:
    return copy.deepcopy(_FEE_STATUS)


def fee_structure() -> list[dict[str, Any]]:
    return copy.deepcopy(_FEE_STRUCTURE)


def dashboard_overview() -> dict[str, Any]:
    return copy.deepcopy(_DASHBOARD)


def platform_analytics() -> dict[str, Any]:
    return copy.deepcopy(_DASHBOARD["analytics"])
