# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance marking for a class section.

AttendanceSheet holds the statuses being marked for one class, section and
day; AttendanceService loads the students and submits the sheet.

Example:
    >>> students = await service.list_students("10", "A")
    >>> sheet = AttendanceSheet.for_students("10", "A", students)
    >>> sheet.mark(students[0].id, AttendanceStatus.ABSENT)
    >>> await service.submit(sheet)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from src.infrastructure.api.client import ApiClient, ApiError
from src.models.attendance import (
    AttendanceEntry,
    AttendanceMarkRequest,
    AttendanceStatus,
    AttendanceStudent,
)
from src.utils.datetime import today

logger = logging.getLogger(__name__)


class AttendanceServiceError(Exception):
    """Base exception for attendance service errors."""

    pass


@dataclass
class AttendanceSheet:
    """Attendance being marked for one class section on one day.

    Attributes:
        class_name: Class, e.g. ``"10"``.
        section: Section, e.g. ``"A"``.
        day: Day the attendance is for.
        statuses: Status per student id, in roll order.
    """

    class_name: str
    section: str | None
    day: date
    statuses: dict[str, AttendanceStatus] = field(default_factory=dict)

    @classmethod
    def for_students(
        cls,
        class_name: str,
        section: str | None,
        students: list[AttendanceStudent],
        day: date | None = None,
    ) -> "AttendanceSheet":
        """Start a sheet with every student marked present."""
        return cls(
            class_name=class_name,
            section=section,
            day=day or today(),
            statuses={student.id: AttendanceStatus.PRESENT for student in students},
        )

    def mark(self, student_id: str, status: AttendanceStatus) -> None:
        """Set the status of one student.

        Raises:
            KeyError: If the student is not on the sheet.
        """
        if student_id not in self.statuses:
            raise KeyError(student_id)
        self.statuses[student_id] = status

    def mark_all(self, status: AttendanceStatus) -> None:
        for student_id in self.statuses:
            self.statuses[student_id] = status

    def counts(self) -> dict[AttendanceStatus, int]:
        """Number of students per status, zero for unused statuses."""
        counter = Counter(self.statuses.values())
        return {status: counter.get(status, 0) for status in AttendanceStatus}

    def percentage(self, status: AttendanceStatus) -> float:
        """Share of the sheet in a status, as a percentage rounded to 0.1."""
        if not self.statuses:
            return 0.0
        return round(self.counts()[status] * 100 / len(self.statuses), 1)

    def to_request(self) -> AttendanceMarkRequest:
        return AttendanceMarkRequest(
            class_=self.class_name,
            section=self.section,
            date=self.day,
            attendance=[
                AttendanceEntry(student_id=student_id, status=status)
                for student_id, status in self.statuses.items()
            ],
        )


class AttendanceService:
    """Service for loading class lists and submitting attendance.

    Attributes:
        api: Backend API client.
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def list_students(
        self,
        class_name: str,
        section: str | None = None,
    ) -> list[AttendanceStudent]:
        """List the students of a class section.

        Raises:
            AttendanceServiceError: If the backend call fails.
        """
        params = {"class": class_name}
        if section:
            params["section"] = section
        try:
            data = await self.api.get("/students", params=params)
        except ApiError as e:
            raise AttendanceServiceError(e.message) from e

        return [AttendanceStudent.model_validate(item) for item in data or []]

    async def submit(self, sheet: AttendanceSheet) -> None:
        """Submit a marked sheet.

        Raises:
            AttendanceServiceError: If the sheet is empty or the backend
                rejects it.
        """
        if not sheet.statuses:
            raise AttendanceServiceError("No students to mark")

        try:
            await self.api.post("/attendance/mark", json=sheet.to_request().to_payload())
        except ApiError as e:
            raise AttendanceServiceError(e.message) from e

        counts = sheet.counts()
        logger.info(
            "Marked attendance for class %s%s on %s: %d present, %d absent, %d late",
            sheet.class_name,
            f"-{sheet.section}" if sheet.section else "",
            sheet.day.isoformat(),
            counts[AttendanceStatus.PRESENT],
            counts[AttendanceStatus.ABSENT],
            counts[AttendanceStatus.LATE],
        )
