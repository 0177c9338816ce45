# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Master data models.

Typed records for the school master data managed from the admin screens:
branches, classes, subjects, teachers, students and fee structures.
"""

from datetime import date
from decimal import Decimal

from pydantic import Field

from src.models.common import APIModel


class School(APIModel):
    """School (tenant) summary."""

    id: str
    name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    principal_name: str | None = None
    status: str | None = None


class Branch(APIModel):
    """Branch (campus) of a school."""

    id: str
    name: str
    school_id: str
    branch_code: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    phone: str | None = None
    email: str | None = None
    status: str | None = None
    is_main_branch: bool = False


class SchoolClass(APIModel):
    """Class/section of a school for an academic year."""

    id: str
    name: str
    school_id: str
    section: str | None = None
    class_teacher: str | None = None
    max_students: int | None = None
    current_students: int | None = None
    is_active: bool = True
    branch_id: str | None = None
    academic_year_id: str | None = None

    @property
    def display_name(self) -> str:
        """Name shown in selectors, e.g. ``Class 10 - A``."""
        if self.section:
            return f"{self.name} - {self.section}"
        return self.name


class Subject(APIModel):
    """Subject taught in a school."""

    id: str
    name: str
    school_id: str
    code: str | None = None
    description: str | None = None
    is_active: bool = True


class Teacher(APIModel):
    """Teacher record."""

    id: str
    first_name: str
    last_name: str = ""
    school_id: str
    employee_id: str | None = None
    email: str | None = None
    phone: str | None = None
    qualification: str | None = None
    experience: str | None = None
    joining_date: date | None = None
    salary: Decimal | None = None
    status: str | None = None
    subjects: list[str] = Field(default_factory=list)
    branch_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Student(APIModel):
    """Student record."""

    id: str
    first_name: str
    last_name: str = ""
    school_id: str
    roll_number: str | None = None
    admission_number: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    father_name: str | None = None
    mother_name: str | None = None
    parent_phone: str | None = None
    parent_email: str | None = None
    admission_date: date | None = None
    status: str | None = None
    branch_id: str | None = None
    class_id: str | None = None
    academic_year_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class FeeStructure(APIModel):
    """Fee line configured for a class and academic year."""

    id: str
    fee_name: str
    amount: Decimal
    school_id: str
    frequency: str | None = None
    category: str | None = None
    is_optional: bool = False
    is_active: bool = True
    due_date: date | None = None
    class_id: str | None = None
    academic_year_id: str | None = None
