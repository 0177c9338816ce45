# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance models."""

import datetime
from enum import Enum

from pydantic import Field

from src.models.common import APIModel


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class AttendanceEntry(APIModel):
    student_id: str
    status: AttendanceStatus


class AttendanceMarkRequest(APIModel):
    """Request body for ``POST /attendance/mark``."""

    class_: str = Field(alias="class")
    section: str | None = None
    date: datetime.date
    attendance: list[AttendanceEntry]


class AttendanceStudent(APIModel):
    """Student row on the attendance sheet."""

    id: str
    name: str
    roll_number: str | None = None
