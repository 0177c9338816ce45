# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic year service for managing academic year operations.

This module provides the AcademicYearService class for:
- Academic year CRUD operations against the backend
- Setting the current academic year
- Validating drafts before anything is sent

Endpoints live under ``/schools/{school_id}/academic-years``.
"""

import logging

from pydantic import ValidationError

from src.domains.academic_year.policy import AcademicYearPolicy, FieldErrors
from src.infrastructure.api.client import ApiClient, ApiError, ApiNotFoundError
from src.infrastructure.api.fetcher import DataFetcher, FetchResult
from src.infrastructure.fallback import datasets
from src.models.academic_year import (
    AcademicYear,
    AcademicYearCreateRequest,
    AcademicYearDraft,
    AcademicYearUpdateRequest,
)
from src.utils.datetime import parse_date

logger = logging.getLogger(__name__)


class AcademicYearServiceError(Exception):
    """Base exception for academic year service errors."""

    pass


class AcademicYearNotFoundError(AcademicYearServiceError):
    """Raised when academic year is not found."""

    pass


class AcademicYearValidationError(AcademicYearServiceError):
    """Raised when a draft fails validation; nothing was sent.

    Attributes:
        errors: Field errors keyed by draft field name.
    """

    def __init__(self, errors: FieldErrors) -> None:
        super().__init__(
            "; ".join(f"{field}: {issue.message}" for field, issue in errors.items())
        )
        self.errors = errors


class AcademicYearCurrentError(AcademicYearServiceError):
    """Raised when a year was saved but could not be made current.

    Attributes:
        record: The saved academic year.
    """

    def __init__(self, message: str, record: AcademicYear) -> None:
        super().__init__(message)
        self.record = record


def _years_path(school_id: str) -> str:
    return f"/schools/{school_id}/academic-years"


def _year_path(school_id: str, year_id: str) -> str:
    return f"{_years_path(school_id)}/{year_id}"


class AcademicYearService:
    """Service for managing academic years.

    This service handles all academic year operations including
    creating, updating, deleting, and setting the current year.
    Create and update validate the draft first and send nothing when it
    is invalid.

    Attributes:
        api: Backend API client.
        fetcher: Fetch helper applying demo-data fallback to listings.
        policy: Validation rules.
    """

    def __init__(
        self,
        api: ApiClient,
        fetcher: DataFetcher,
        policy: AcademicYearPolicy | None = None,
    ) -> None:
        """Initialize academic year service.

        Args:
            api: Backend API client.
            fetcher: Fetch helper for listings.
            policy: Validation rules (default clock if omitted).
        """
        self.api = api
        self.fetcher = fetcher
        self.policy = policy or AcademicYearPolicy()

    def build_request(self, draft: AcademicYearDraft) -> AcademicYearCreateRequest:
        """Validate a draft and convert it to a request body.

        Args:
            draft: Form input.

        Returns:
            Request body ready to send.

        Raises:
            AcademicYearValidationError: If the draft is invalid.
        """
        errors = self.policy.validate_form(draft)
        if errors:
            raise AcademicYearValidationError(errors)

        try:
            return AcademicYearCreateRequest(
                name=draft.name,
                start_date=parse_date(draft.start_date),
                end_date=parse_date(draft.end_date),
                school_id=draft.school_id.strip(),
                branch_id=draft.branch_id or None,
                description=draft.description or None,
                is_active=draft.is_active,
            )
        except ValidationError as e:
            raise AcademicYearServiceError(f"Invalid academic year data: {e}") from e

    async def list_academic_years(self, school_id: str) -> FetchResult[list[AcademicYear]]:
        """List the academic years of a school.

        Args:
            school_id: Owning school.

        Returns:
            Years, newest first, tagged live or fallback.

        Raises:
            AcademicYearServiceError: If the backend fails and no fallback
                applies.
        """
        try:
            result = await self.fetcher.fetch(
                "academic years",
                lambda: self.api.get(_years_path(school_id)),
                fallback=lambda: datasets.academic_years(school_id),
            )
        except ApiError as e:
            raise AcademicYearServiceError(e.message) from e

        years = [
            AcademicYear.model_validate({"schoolId": school_id, **item})
            for item in result.data or []
        ]
        years.sort(key=lambda year: year.start_date, reverse=True)
        return FetchResult(data=years, source=result.source, error=result.error)

    async def get_academic_year(self, school_id: str, year_id: str) -> AcademicYear:
        """Get academic year by ID.

        Args:
            school_id: Owning school.
            year_id: Academic year identifier.

        Returns:
            Academic year details.

        Raises:
            AcademicYearNotFoundError: If year not found.
        """
        try:
            data = await self.api.get(_year_path(school_id, year_id))
        except ApiNotFoundError as e:
            raise AcademicYearNotFoundError(f"Academic year {year_id} not found") from e
        except ApiError as e:
            raise AcademicYearServiceError(e.message) from e

        return AcademicYear.model_validate(data)

    async def get_current_year(self, school_id: str) -> AcademicYear | None:
        """Get the current academic year of a school.

        Returns:
            Current academic year or None if not set.
        """
        result = await self.list_academic_years(school_id)
        return self.policy.current_of(result.data)

    async def create_academic_year(self, draft: AcademicYearDraft) -> AcademicYear:
        """Create a new academic year.

        When the draft asks for the year to be current, the set-current
        endpoint is called after the create succeeds.

        Args:
            draft: Form input.

        Returns:
            Created academic year.

        Raises:
            AcademicYearValidationError: If the draft is invalid.
            AcademicYearCurrentError: If the year was created but set-current failed.
            AcademicYearServiceError: If the backend rejects the request.
        """
        request = self.build_request(draft)

        try:
            data = await self.api.post(_years_path(request.school_id), json=request.to_payload())
        except ApiError as e:
            raise AcademicYearServiceError(e.message) from e

        academic_year = AcademicYear.model_validate(data)
        logger.info("Created academic year: %s (%s)", academic_year.name, academic_year.id)

        if draft.is_current and not academic_year.is_current:
            return await self._make_current(academic_year)

        return academic_year

    async def update_academic_year(
        self,
        year_id: str,
        draft: AcademicYearDraft,
    ) -> AcademicYear:
        """Update an academic year in place.

        Args:
            year_id: Academic year identifier.
            draft: Form input; its school owns the year.

        Returns:
            Updated academic year.

        Raises:
            AcademicYearValidationError: If the draft is invalid.
            AcademicYearNotFoundError: If year not found.
            AcademicYearCurrentError: If the year was saved but set-current failed.
            AcademicYearServiceError: If the backend rejects the request.
        """
        request = AcademicYearUpdateRequest.model_validate(self.build_request(draft).model_dump())

        try:
            data = await self.api.put(
                _year_path(request.school_id, year_id),
                json=request.to_payload(),
            )
        except ApiNotFoundError as e:
            raise AcademicYearNotFoundError(f"Academic year {year_id} not found") from e
        except ApiError as e:
            raise AcademicYearServiceError(e.message) from e

        academic_year = AcademicYear.model_validate(data)
        logger.info("Updated academic year: %s", year_id)

        if draft.is_current and not academic_year.is_current:
            return await self._make_current(academic_year)

        return academic_year

    async def _make_current(self, academic_year: AcademicYear) -> AcademicYear:
        try:
            return await self.set_current_year(academic_year.school_id, academic_year.id)
        except AcademicYearServiceError as e:
            logger.warning(
                "Saved academic year %s but could not make it current: %s",
                academic_year.id,
                e,
            )
            raise AcademicYearCurrentError(str(e), academic_year) from e

    async def delete_academic_year(self, school_id: str, year_id: str) -> None:
        """Delete an academic year.

        Raises:
            AcademicYearNotFoundError: If year not found.
            AcademicYearServiceError: If the backend refuses, e.g. classes
                still reference the year.
        """
        try:
            await self.api.delete(_year_path(school_id, year_id))
        except ApiNotFoundError as e:
            raise AcademicYearNotFoundError(f"Academic year {year_id} not found") from e
        except ApiError as e:
            raise AcademicYearServiceError(e.message) from e

        logger.info("Deleted academic year: %s", year_id)

    async def set_current_year(self, school_id: str, year_id: str) -> AcademicYear:
        """Set an academic year as current.

        The backend unsets the previously current year of the school.

        Returns:
            Updated academic year.

        Raises:
            AcademicYearNotFoundError: If year not found.
        """
        try:
            data = await self.api.post(f"{_year_path(school_id, year_id)}/set-current")
        except ApiNotFoundError as e:
            raise AcademicYearNotFoundError(f"Academic year {year_id} not found") from e
        except ApiError as e:
            raise AcademicYearServiceError(e.message) from e

        logger.info("Set academic year %s as current", year_id)

        if data:
            return AcademicYear.model_validate(data)
        return await self.get_academic_year(school_id, year_id)
