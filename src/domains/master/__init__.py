# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Master data domain package.

This package provides CRUD services for branches, classes, subjects,
teachers, students and fee structures, plus the form validators run
before records are sent.
"""

from src.domains.master.service import (
    BranchService,
    ClassService,
    FeeStructureService,
    MasterDataError,
    MasterDataNotFoundError,
    MasterDataService,
    MasterDataValidationError,
    MasterResourceService,
    StudentService,
    SubjectService,
    TeacherService,
)
from src.domains.master.validation import (
    validate_fee_payment,
    validate_fee_structure,
    validate_student,
    validate_teacher,
)

__all__ = [
    "MasterDataService",
    "MasterResourceService",
    "BranchService",
    "ClassService",
    "SubjectService",
    "TeacherService",
    "StudentService",
    "FeeStructureService",
    "MasterDataError",
    "MasterDataNotFoundError",
    "MasterDataValidationError",
    "validate_student",
    "validate_teacher",
    "validate_fee_structure",
    "validate_fee_payment",
]
