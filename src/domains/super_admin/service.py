# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Super-admin platform service.

This module provides the SuperAdminService class for:
- Dashboard overview and platform, revenue and geographic analytics
- Managing schools across tenants
- Listing users and changing their status
- Billing records
- Platform settings
- Backend health

Endpoints live under ``/super-admin``. Dashboard and platform analytics
support demo-data fallback; everything else reports failures.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from src.infrastructure.api.client import ApiClient, ApiError, ApiNotFoundError
from src.infrastructure.api.fetcher import DataFetcher, FetchResult
from src.infrastructure.fallback import datasets
from src.models.super_admin import (
    BillingRecord,
    DashboardOverview,
    PlatformAnalytics,
    PlatformSchool,
    PlatformSetting,
    PlatformUser,
    RegionStats,
    RevenuePoint,
    SystemHealth,
)

logger = logging.getLogger(__name__)

BASE_PATH = "/super-admin"
REVENUE_PERIODS = ("daily", "monthly", "yearly")


class SuperAdminServiceError(Exception):
    """Base exception for super-admin service errors."""

    pass


class PlatformRecordNotFoundError(SuperAdminServiceError):
    """Raised when a school, user or billing record is not found."""

    pass


class SuperAdminService:
    """Service for platform-wide administration.

    Attributes:
        api: Backend API client.
        fetcher: Fetch helper applying demo-data fallback to the dashboard.
    """

    def __init__(self, api: ApiClient, fetcher: DataFetcher) -> None:
        self.api = api
        self.fetcher = fetcher

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        # Unset filters are left out of the query string
        params = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            return await self.api.get(f"{BASE_PATH}{path}", params=params or None)
        except ApiNotFoundError as e:
            raise PlatformRecordNotFoundError(e.detail) from e
        except ApiError as e:
            raise SuperAdminServiceError(e.message) from e

    async def _put(self, path: str, json: Any) -> Any:
        try:
            return await self.api.put(f"{BASE_PATH}{path}", json=json)
        except ApiNotFoundError as e:
            raise PlatformRecordNotFoundError(e.detail) from e
        except ApiError as e:
            raise SuperAdminServiceError(e.message) from e

    # Dashboard and analytics

    async def get_dashboard(self) -> FetchResult[DashboardOverview]:
        """Get the dashboard overview with recent schools and billing."""
        try:
            result = await self.fetcher.fetch(
                "super-admin dashboard",
                lambda: self.api.get(f"{BASE_PATH}/dashboard"),
                fallback=datasets.dashboard_overview,
            )
        except ApiError as e:
            raise SuperAdminServiceError(e.message) from e
        overview = DashboardOverview.model_validate(result.data or {})
        return FetchResult(data=overview, source=result.source, error=result.error)

    async def get_platform_analytics(self) -> FetchResult[PlatformAnalytics]:
        """Get platform counters, users by role and revenue by plan."""
        try:
            result = await self.fetcher.fetch(
                "platform analytics",
                lambda: self.api.get(f"{BASE_PATH}/analytics"),
                fallback=datasets.platform_analytics,
            )
        except ApiError as e:
            raise SuperAdminServiceError(e.message) from e
        analytics = PlatformAnalytics.model_validate(result.data or {})
        return FetchResult(data=analytics, source=result.source, error=result.error)

    async def get_revenue_analytics(self, period: str = "monthly") -> list[RevenuePoint]:
        """Get paid revenue grouped by period.

        Args:
            period: ``daily``, ``monthly`` or ``yearly``.

        Raises:
            ValueError: If the period is not supported.
            SuperAdminServiceError: If the backend call fails.
        """
        if period not in REVENUE_PERIODS:
            raise ValueError(f"Unsupported revenue period: {period}")
        data = await self._get("/analytics/revenue", params={"period": period})
        return [RevenuePoint.model_validate(item) for item in data or []]

    async def get_geographic_analytics(self) -> list[RegionStats]:
        data = await self._get("/analytics/geographic")
        return [RegionStats.model_validate(item) for item in data or []]

    # Schools

    async def list_schools(
        self,
        status: str | None = None,
        plan: str | None = None,
        search: str | None = None,
    ) -> list[PlatformSchool]:
        """List schools, optionally filtered by status, plan or search text."""
        data = await self._get(
            "/schools",
            params={"status": status, "plan": plan, "search": search},
        )
        return [PlatformSchool.model_validate(item) for item in data or []]

    async def get_school(self, school_id: str) -> PlatformSchool:
        data = await self._get(f"/schools/{school_id}")
        if not data:
            raise PlatformRecordNotFoundError(f"School {school_id} not found")
        return PlatformSchool.model_validate(data)

    async def create_school(self, registration: Mapping[str, Any]) -> PlatformSchool:
        """Register a new school.

        Args:
            registration: camelCase registration form (``schoolName``,
                ``city``, ``state``, ``principalName``, contact details, ...).

        Returns:
            The created school.

        Raises:
            SuperAdminServiceError: If the backend rejects the registration.
        """
        try:
            data = await self.api.post(f"{BASE_PATH}/schools", json=dict(registration))
        except ApiError as e:
            raise SuperAdminServiceError(e.message) from e

        # Registration may answer with the school nested next to its admin
        if isinstance(data, dict) and isinstance(data.get("school"), dict):
            data = data["school"]

        try:
            school = PlatformSchool.model_validate(data)
        except ValidationError as e:
            raise SuperAdminServiceError(f"Unexpected school data: {e}") from e

        logger.info("Registered school: %s (%s)", school.name, school.id)
        return school

    async def update_school(self, school_id: str, changes: Mapping[str, Any]) -> PlatformSchool:
        data = await self._put(f"/schools/{school_id}", json=dict(changes))
        logger.info("Updated school: %s", school_id)
        return PlatformSchool.model_validate(data)

    async def delete_school(self, school_id: str) -> None:
        try:
            await self.api.delete(f"{BASE_PATH}/schools/{school_id}")
        except ApiNotFoundError as e:
            raise PlatformRecordNotFoundError(f"School {school_id} not found") from e
        except ApiError as e:
            raise SuperAdminServiceError(e.message) from e

        logger.info("Deleted school: %s", school_id)

    # Users

    async def list_users(
        self,
        role: str | None = None,
        status: str | None = None,
        school_id: str | None = None,
        search: str | None = None,
    ) -> list[PlatformUser]:
        data = await self._get(
            "/users",
            params={"role": role, "status": status, "schoolId": school_id, "search": search},
        )
        return [PlatformUser.model_validate(item) for item in data or []]

    async def update_user_status(self, user_id: str, status: str) -> PlatformUser:
        """Activate, deactivate or suspend a user.

        Raises:
            PlatformRecordNotFoundError: If the user is not found.
        """
        data = await self._put(f"/users/{user_id}/status", json={"status": status})
        if not data:
            raise PlatformRecordNotFoundError(f"User {user_id} not found")
        logger.info("Set user %s status to %s", user_id, status)
        return PlatformUser.model_validate(data)

    # Billing

    async def list_billing(
        self,
        status: str | None = None,
        plan: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[BillingRecord]:
        """List billing records.

        The date range only applies when both ends are given.
        """
        params: dict[str, Any] = {"status": status, "plan": plan}
        if start_date and end_date:
            params["startDate"] = start_date.isoformat()
            params["endDate"] = end_date.isoformat()
        data = await self._get("/billing", params=params)
        return [BillingRecord.model_validate(item) for item in data or []]

    async def update_billing_status(
        self,
        billing_id: str,
        status: str,
        paid_date: date | None = None,
    ) -> BillingRecord:
        body: dict[str, Any] = {"status": status}
        if paid_date:
            body["paidDate"] = paid_date.isoformat()
        data = await self._put(f"/billing/{billing_id}/status", json=body)
        return BillingRecord.model_validate(data)

    # Settings

    async def get_settings(self, category: str | None = None) -> list[PlatformSetting]:
        data = await self._get("/settings", params={"category": category})
        return [PlatformSetting.model_validate(item) for item in data or []]

    async def update_setting(self, key: str, value: str, category: str) -> PlatformSetting:
        """Create or update one platform setting."""
        data = await self._put(f"/settings/{key}", json={"value": value, "category": category})
        logger.info("Updated platform setting %s.%s", category, key)
        return PlatformSetting.model_validate(data)

    async def update_settings(self, settings: list[PlatformSetting]) -> list[PlatformSetting]:
        data = await self._put("/settings", json=[setting.to_payload() for setting in settings])
        return [PlatformSetting.model_validate(item) for item in data or []]

    # Health

    async def get_health(self) -> SystemHealth:
        data = await self._get("/health")
        return SystemHealth.model_validate(data)
