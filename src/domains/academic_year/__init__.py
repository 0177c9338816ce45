# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic year domain package.

This package provides academic year management functionality including:
- Academic year name and date range validation
- Academic year CRUD operations
- Setting current academic year
- The add/edit form flow
"""

from src.domains.academic_year.form import AcademicYearForm, FormMode, SubmitOutcome
from src.domains.academic_year.policy import (
    AcademicYearErrorCode,
    AcademicYearPolicy,
    ValidationIssue,
)
from src.domains.academic_year.service import (
    AcademicYearCurrentError,
    AcademicYearNotFoundError,
    AcademicYearService,
    AcademicYearServiceError,
    AcademicYearValidationError,
)

__all__ = [
    "AcademicYearPolicy",
    "AcademicYearErrorCode",
    "ValidationIssue",
    "AcademicYearService",
    "AcademicYearServiceError",
    "AcademicYearNotFoundError",
    "AcademicYearCurrentError",
    "AcademicYearValidationError",
    "AcademicYearForm",
    "FormMode",
    "SubmitOutcome",
]
