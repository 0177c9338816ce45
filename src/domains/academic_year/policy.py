# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic year validation rules.

This module provides the AcademicYearPolicy class for:
- Academic year name validation (``YYYY-YY``, consecutive years, near today)
- Date range validation (ordered, 10 to 14 months long)
- Whole-form validation gating create/update requests
- Picking the current year out of a school's years

All checks are pure and synchronous. The only outside input is the clock
used for the name range check, which is injectable.

Example:
    >>> policy = AcademicYearPolicy()
    >>> policy.validate_name("2024-26").code
    <AcademicYearErrorCode.SEQUENCE: 'sequence'>
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from src.models.academic_year import AcademicYear, AcademicYearDraft
from src.utils.datetime import parse_date, today, whole_months_between

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}")
YEAR_WINDOW = 5
MIN_MONTHS = 10
MAX_MONTHS = 14


class AcademicYearErrorCode(str, Enum):
    """Validation failure codes."""

    EMPTY = "empty"
    FORMAT = "format"
    SEQUENCE = "sequence"
    RANGE = "range"
    REQUIRED = "required"
    INVALID = "invalid"
    ORDER = "order"
    DURATION = "duration"
    SCHOOL_REQUIRED = "school_required"


@dataclass(frozen=True)
class ValidationIssue:
    """A field-level validation failure.

    Attributes:
        code: Machine-readable failure code.
        message: Message shown next to the field.
    """

    code: AcademicYearErrorCode
    message: str

    def __str__(self) -> str:
        return self.message


FieldErrors = dict[str, ValidationIssue]


class AcademicYearPolicy:
    """Validation rules applied to academic year forms before submit.

    Attributes:
        clock: Callable returning today's date; drives the name range check.
    """

    def __init__(self, clock: Callable[[], date] = today) -> None:
        """Initialize the policy.

        Args:
            clock: Source of today's date.
        """
        self.clock = clock

    def validate_name(self, name: str) -> ValidationIssue | None:
        """Validate an academic year name such as ``2024-25``.

        Args:
            name: Name as typed.

        Returns:
            The first failing rule, or None when the name is valid.
        """
        if not name.strip():
            return ValidationIssue(
                AcademicYearErrorCode.EMPTY,
                "Academic year name is required",
            )

        if not NAME_PATTERN.fullmatch(name):
            return ValidationIssue(
                AcademicYearErrorCode.FORMAT,
                "Format should be YYYY-YY (e.g., 2024-25)",
            )

        start_part, end_part = name.split("-")
        start_year = int(start_part)
        end_year = 2000 + int(end_part)

        if end_year != start_year + 1:
            return ValidationIssue(
                AcademicYearErrorCode.SEQUENCE,
                "End year should be exactly one year after start year",
            )

        current_year = self.clock().year
        if not current_year - YEAR_WINDOW <= start_year <= current_year + YEAR_WINDOW:
            return ValidationIssue(
                AcademicYearErrorCode.RANGE,
                f"Academic year should be within {YEAR_WINDOW} years of current year",
            )

        return None

    def validate_dates(
        self,
        start_date: date | str | None,
        end_date: date | str | None,
    ) -> FieldErrors:
        """Validate an academic year date range.

        Errors are keyed ``start_date`` / ``end_date``. Ordering problems are
        reported on the end date; an out-of-order range is not also checked
        for duration.

        Args:
            start_date: First day, as a date or ISO string.
            end_date: Last day, as a date or ISO string.

        Returns:
            Field errors; empty when the range is valid.
        """
        errors: FieldErrors = {}
        start = self._parse_field(start_date, "start_date", "Start date", errors)
        end = self._parse_field(end_date, "end_date", "End date", errors)

        if start is None or end is None:
            return errors

        if start >= end:
            errors["end_date"] = ValidationIssue(
                AcademicYearErrorCode.ORDER,
                "End date must be after start date",
            )
            return errors

        months = whole_months_between(start, end)
        if not MIN_MONTHS <= months <= MAX_MONTHS:
            errors["end_date"] = ValidationIssue(
                AcademicYearErrorCode.DURATION,
                f"Academic year should be {MIN_MONTHS}-{MAX_MONTHS} months long",
            )

        return errors

    def validate_form(self, draft: AcademicYearDraft) -> FieldErrors:
        """Validate a whole academic year form.

        Args:
            draft: Form input.

        Returns:
            Field errors keyed by draft field name; empty when the form
            may be submitted.
        """
        errors: FieldErrors = {}

        name_error = self.validate_name(draft.name)
        if name_error:
            errors["name"] = name_error

        errors.update(self.validate_dates(draft.start_date, draft.end_date))

        if not draft.school_id.strip():
            errors["school_id"] = ValidationIssue(
                AcademicYearErrorCode.SCHOOL_REQUIRED,
                "School selection is required",
            )

        return errors

    def current_of(self, years: Iterable[AcademicYear]) -> AcademicYear | None:
        """Pick the current academic year of a school.

        The backend keeps at most one year current per school. If a listing
        ever contains several, the one starting last wins.

        Args:
            years: Academic years of one school.

        Returns:
            The current year, or None when none is flagged.
        """
        current = [year for year in years if year.is_current]
        if not current:
            return None
        if len(current) > 1:
            logger.warning(
                "School %s has %d academic years flagged current: %s",
                current[0].school_id,
                len(current),
                ", ".join(year.name for year in current),
            )
        return max(current, key=lambda year: year.start_date)

    @staticmethod
    def _parse_field(
        value: date | str | None,
        field: str,
        label: str,
        errors: FieldErrors,
    ) -> date | None:
        try:
            parsed = parse_date(value)
        except ValueError:
            errors[field] = ValidationIssue(
                AcademicYearErrorCode.INVALID,
                f"{label} is not a valid date",
            )
            return None

        if parsed is None:
            errors[field] = ValidationIssue(
                AcademicYearErrorCode.REQUIRED,
                f"{label} is required",
            )
        return parsed
