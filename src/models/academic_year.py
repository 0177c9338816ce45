# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic year models.

- AcademicYear: a record as returned by the API.
- AcademicYearDraft: raw form input, validated before it is sent.
- AcademicYearCreateRequest / AcademicYearUpdateRequest: request bodies.
"""

from datetime import date, datetime

from pydantic import Field

from src.models.common import APIModel


class AcademicYear(APIModel):
    """Academic year record owned by a school."""

    id: str
    name: str
    start_date: date
    end_date: date
    school_id: str
    branch_id: str | None = None
    description: str | None = None
    is_active: bool = False
    is_current: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def contains(self, day: date) -> bool:
        """Check whether a date falls inside this academic year."""
        return self.start_date <= day <= self.end_date


class AcademicYearDraft(APIModel):
    """Academic year form input.

    Every field holds what the user typed, so dates are kept as strings
    until validation has passed.
    """

    name: str = ""
    start_date: str = ""
    end_date: str = ""
    school_id: str = ""
    branch_id: str = ""
    description: str = ""
    is_active: bool = True
    is_current: bool = False

    @classmethod
    def from_record(cls, record: AcademicYear) -> "AcademicYearDraft":
        """Build a draft pre-filled from an existing record (edit mode)."""
        return cls(
            name=record.name,
            start_date=record.start_date.isoformat(),
            end_date=record.end_date.isoformat(),
            school_id=record.school_id,
            branch_id=record.branch_id or "",
            description=record.description or "",
            is_active=record.is_active,
            is_current=record.is_current,
        )


class AcademicYearCreateRequest(APIModel):
    """Request body for creating an academic year.

    ``is_current`` is not part of the body; the current year is switched
    through the set-current endpoint only.
    """

    name: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    start_date: date
    end_date: date
    school_id: str = Field(..., min_length=1)
    branch_id: str | None = None
    description: str | None = None
    is_active: bool = True


class AcademicYearUpdateRequest(AcademicYearCreateRequest):
    """Request body for updating an academic year in place."""
