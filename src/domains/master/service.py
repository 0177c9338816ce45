# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Master data services.

This module provides one CRUD service per master data resource. They share
MasterResourceService, which owns the request/response handling; subclasses
only declare the resource path, the record model, an optional payload
validator and optional demo data.

Endpoints:
- Branches: ``/schools/{school_id}/branches[/{id}]``
- Classes, subjects, teachers, students, fee structures:
  ``/master/<resource>[/{id}]`` scoped with ``?schoolId=``
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError

from src.domains.master.validation import (
    validate_fee_structure,
    validate_student,
    validate_teacher,
)
from src.infrastructure.api.client import ApiClient, ApiError, ApiNotFoundError
from src.infrastructure.api.fetcher import DataFetcher, FetchResult
from src.infrastructure.fallback import datasets
from src.models.common import APIModel
from src.models.master import Branch, FeeStructure, SchoolClass, Student, Subject, Teacher

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=APIModel)


class MasterDataError(Exception):
    """Base exception for master data errors."""

    pass


class MasterDataNotFoundError(MasterDataError):
    """Raised when a master record is not found."""

    pass


class MasterDataValidationError(MasterDataError):
    """Raised when a payload fails validation; nothing was sent.

    Attributes:
        errors: Field errors keyed by payload key.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


class MasterResourceService(Generic[RecordT]):
    """CRUD operations for one master data resource.

    Attributes:
        resource: Path segment under ``/master``.
        label: Singular name used in logs and errors.
        model: Record model returned by the service.
        validator: Payload validator run before create/update.
        api: Backend API client.
        fetcher: Fetch helper for listings.
    """

    resource: ClassVar[str]
    label: ClassVar[str]
    model: type[RecordT]
    validator: ClassVar[Callable[[Mapping[str, Any]], dict[str, str]] | None] = None

    def __init__(self, api: ApiClient, fetcher: DataFetcher) -> None:
        self.api = api
        self.fetcher = fetcher

    def collection_path(self, school_id: str) -> str:
        return f"/master/{self.resource}"

    def item_path(self, school_id: str, item_id: str) -> str:
        return f"{self.collection_path(school_id)}/{item_id}"

    def scope_params(self, school_id: str) -> dict[str, Any]:
        """Query parameters that scope requests to a school."""
        return {"schoolId": school_id}

    def fallback(self, school_id: str) -> list[dict[str, Any]] | None:
        """Demo records for the listing, or None when there are none."""
        return None

    def _parse(self, data: Any, school_id: str) -> RecordT:
        if isinstance(data, dict):
            data = {"schoolId": school_id, **data}
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise MasterDataError(f"Unexpected {self.label} data: {e}") from e

    def _check(self, payload: Mapping[str, Any]) -> None:
        if self.validator is None:
            return
        errors = self.validator(payload)
        if errors:
            raise MasterDataValidationError(errors)

    async def list_all(self, school_id: str, **filters: Any) -> FetchResult[list[RecordT]]:
        """List the records of a school.

        Args:
            school_id: Owning school.
            **filters: Extra query parameters (camelCase keys), e.g.
                ``classId`` or ``academicYearId``.

        Returns:
            Records tagged live or fallback.
        """
        params = {**self.scope_params(school_id), **filters}
        fallback = self.fallback(school_id)
        try:
            result = await self.fetcher.fetch(
                self.resource,
                lambda: self.api.get(self.collection_path(school_id), params=params),
                fallback=(lambda: fallback) if fallback is not None else None,
            )
        except ApiError as e:
            raise MasterDataError(e.message) from e
        items = [self._parse(item, school_id) for item in result.data or []]
        return FetchResult(data=items, source=result.source, error=result.error)

    async def get(self, school_id: str, item_id: str) -> RecordT:
        """Get a record by ID.

        Raises:
            MasterDataNotFoundError: If the record is not found.
        """
        try:
            data = await self.api.get(
                self.item_path(school_id, item_id),
                params=self.scope_params(school_id),
            )
        except ApiNotFoundError as e:
            raise MasterDataNotFoundError(f"{self.label} {item_id} not found") from e
        except ApiError as e:
            raise MasterDataError(e.message) from e

        return self._parse(data, school_id)

    async def create(self, school_id: str, payload: Mapping[str, Any]) -> RecordT:
        """Create a record.

        Args:
            school_id: Owning school, added to the body.
            payload: camelCase request body.

        Returns:
            Created record.

        Raises:
            MasterDataValidationError: If the payload is invalid.
            MasterDataError: If the backend rejects the request.
        """
        body = {**payload, "schoolId": school_id}
        self._check(body)

        try:
            data = await self.api.post(self.collection_path(school_id), json=body)
        except ApiError as e:
            raise MasterDataError(e.message) from e

        record = self._parse(data, school_id)
        logger.info("Created %s: %s", self.label, getattr(record, "id", "?"))
        return record

    async def update(self, school_id: str, item_id: str, payload: Mapping[str, Any]) -> RecordT:
        """Update a record.

        Raises:
            MasterDataValidationError: If the payload is invalid.
            MasterDataNotFoundError: If the record is not found.
            MasterDataError: If the backend rejects the request.
        """
        body = {**payload, "schoolId": school_id}
        self._check(body)

        try:
            data = await self.api.put(self.item_path(school_id, item_id), json=body)
        except ApiNotFoundError as e:
            raise MasterDataNotFoundError(f"{self.label} {item_id} not found") from e
        except ApiError as e:
            raise MasterDataError(e.message) from e

        logger.info("Updated %s: %s", self.label, item_id)
        return self._parse(data, school_id)

    async def delete(self, school_id: str, item_id: str) -> None:
        """Delete a record.

        Raises:
            MasterDataNotFoundError: If the record is not found.
            MasterDataError: If the backend refuses the delete.
        """
        try:
            await self.api.delete(self.item_path(school_id, item_id))
        except ApiNotFoundError as e:
            raise MasterDataNotFoundError(f"{self.label} {item_id} not found") from e
        except ApiError as e:
            raise MasterDataError(e.message) from e

        logger.info("Deleted %s: %s", self.label, item_id)


class BranchService(MasterResourceService[Branch]):
    """Branches (campuses) of a school."""

    resource = "branches"
    label = "Branch"
    model = Branch

    def collection_path(self, school_id: str) -> str:
        return f"/schools/{school_id}/branches"

    def scope_params(self, school_id: str) -> dict[str, Any]:
        return {}

    def fallback(self, school_id: str) -> list[dict[str, Any]] | None:
        return datasets.branches_for([school_id])


class ClassService(MasterResourceService[SchoolClass]):
    resource = "classes"
    label = "Class"
    model = SchoolClass

    def fallback(self, school_id: str) -> list[dict[str, Any]] | None:
        return datasets.classes(school_id)


class SubjectService(MasterResourceService[Subject]):
    resource = "subjects"
    label = "Subject"
    model = Subject


class TeacherService(MasterResourceService[Teacher]):
    resource = "teachers"
    label = "Teacher"
    model = Teacher
    validator = staticmethod(validate_teacher)


class StudentService(MasterResourceService[Student]):
    resource = "students"
    label = "Student"
    model = Student
    validator = staticmethod(validate_student)


class FeeStructureService(MasterResourceService[FeeStructure]):
    resource = "fee-structures"
    label = "Fee structure"
    model = FeeStructure
    validator = staticmethod(validate_fee_structure)


class MasterDataService:
    """Entry point grouping the master data resources.

    Example:
        >>> master = MasterDataService(api, fetcher)
        >>> result = await master.classes.list_all("s-1")
    """

    def __init__(self, api: ApiClient, fetcher: DataFetcher) -> None:
        self.branches = BranchService(api, fetcher)
        self.classes = ClassService(api, fetcher)
        self.subjects = SubjectService(api, fetcher)
        self.teachers = TeacherService(api, fetcher)
        self.students = StudentService(api, fetcher)
        self.fee_structures = FeeStructureService(api, fetcher)
