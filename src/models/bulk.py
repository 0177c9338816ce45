# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bulk upload models."""

from enum import Enum

from pydantic import Field

from src.models.common import APIModel


class BulkEntity(str, Enum):
    """Entities that can be onboarded from a CSV file."""

    STUDENTS = "students"
    TEACHERS = "teachers"


class GeneratedCredential(APIModel):
    """Login generated by the backend for an uploaded row."""

    username: str
    password: str
    name: str | None = None
    email: str | None = None


class BulkUploadResult(APIModel):
    """Outcome of a CSV upload."""

    successful: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)
    credentials: list[GeneratedCredential] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.successful + self.failed
