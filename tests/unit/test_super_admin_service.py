# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the super-admin platform service."""

from datetime import date
from decimal import Decimal

import pytest

from src.domains.super_admin.service import (
    PlatformRecordNotFoundError,
    SuperAdminService,
    SuperAdminServiceError,
)
from src.infrastructure.api.client import ApiConnectionError, ApiNotFoundError, ApiResponseError
from src.models.super_admin import PlatformSetting


@pytest.fixture
def admin_service(mock_api, fetcher):
    """Create super-admin service with mock API client."""
    return SuperAdminService(mock_api, fetcher)


@pytest.fixture
def school_data():
    """Provide a school row as the backend lists it."""
    return {
        "id": "school-1",
        "name": "Greenwood High",
        "location": "Pune",
        "state": "Maharashtra",
        "students": "420",
        "teachers": 31,
        "plan": "Premium",
        "status": "Active",
        "monthlyRevenue": "15000.00",
    }


class TestDashboard:
    """Tests for the dashboard and analytics."""

    @pytest.mark.asyncio
    async def test_live_dashboard(self, admin_service, mock_api, school_data):
        """Test the dashboard parses counters and recent schools."""
        mock_api.get.return_value = {
            "analytics": {
                "overview": {"totalSchools": "12", "activeSchools": 10, "totalUsers": 900},
                "usersByRole": [{"role": "teacher", "count": "80"}],
            },
            "recentSchools": [school_data],
            "recentBilling": [],
        }

        result = await admin_service.get_dashboard()

        mock_api.get.assert_awaited_once_with("/super-admin/dashboard")
        assert result.data.analytics.overview.total_schools == 12
        assert result.data.analytics.users_by_role[0].count == 80
        assert result.data.recent_schools[0].students == 420
        assert not result.is_fallback

    @pytest.mark.asyncio
    async def test_dashboard_fallback(self, admin_service, mock_api):
        """Test the demo dashboard is labelled as fallback."""
        mock_api.get.side_effect = ApiConnectionError("refused")

        result = await admin_service.get_dashboard()

        assert result.is_fallback
        assert result.data.analytics.overview.total_schools == 1
        assert result.data.recent_schools[0].name == "Demo Public School"

    @pytest.mark.asyncio
    async def test_dashboard_without_fallback(self, mock_api, strict_fetcher):
        """Test dashboard failures raise when fallback is disabled."""
        mock_api.get.side_effect = ApiConnectionError("refused")

        with pytest.raises(SuperAdminServiceError):
            await SuperAdminService(mock_api, strict_fetcher).get_dashboard()

    @pytest.mark.asyncio
    async def test_revenue_analytics(self, admin_service, mock_api):
        """Test revenue is requested per period."""
        mock_api.get.return_value = [{"period": "2024-06", "revenue": "45000", "transactions": "3"}]

        points = await admin_service.get_revenue_analytics("monthly")

        mock_api.get.assert_awaited_once_with(
            "/super-admin/analytics/revenue", params={"period": "monthly"}
        )
        assert points[0].revenue == Decimal("45000")
        assert points[0].transactions == 3

    @pytest.mark.asyncio
    async def test_revenue_bad_period(self, admin_service, mock_api):
        """Test unsupported periods are rejected locally."""
        with pytest.raises(ValueError, match="weekly"):
            await admin_service.get_revenue_analytics("weekly")

        mock_api.get.assert_not_awaited()


class TestSchools:
    """Tests for school management."""

    @pytest.mark.asyncio
    async def test_list_drops_unset_filters(self, admin_service, mock_api, school_data):
        """Test only the given filters are sent."""
        mock_api.get.return_value = [school_data]

        schools = await admin_service.list_schools(plan="Premium")

        mock_api.get.assert_awaited_once_with("/super-admin/schools", params={"plan": "Premium"})
        assert schools[0].monthly_revenue == Decimal("15000.00")

    @pytest.mark.asyncio
    async def test_create_unwraps_nested_school(self, admin_service, mock_api, school_data):
        """Test registration responses nesting the school are accepted."""
        mock_api.post.return_value = {"school": school_data, "admin": {"email": "p@g.edu"}}

        school = await admin_service.create_school({"schoolName": "Greenwood High"})

        mock_api.post.assert_awaited_once_with(
            "/super-admin/schools", json={"schoolName": "Greenwood High"}
        )
        assert school.id == "school-1"

    @pytest.mark.asyncio
    async def test_create_rejected(self, admin_service, mock_api):
        """Test refused registrations raise SuperAdminServiceError."""
        mock_api.post.side_effect = ApiResponseError("POST failed (409): exists", 409, "exists")

        with pytest.raises(SuperAdminServiceError, match="exists"):
            await admin_service.create_school({"schoolName": "Greenwood High"})

    @pytest.mark.asyncio
    async def test_get_missing_school(self, admin_service, mock_api):
        """Test unknown schools raise PlatformRecordNotFoundError."""
        mock_api.get.side_effect = ApiNotFoundError("GET failed (404)", 404, "School not found")

        with pytest.raises(PlatformRecordNotFoundError, match="School not found"):
            await admin_service.get_school("school-9")

    @pytest.mark.asyncio
    async def test_delete_school(self, admin_service, mock_api):
        """Test schools are deleted by id."""
        await admin_service.delete_school("school-1")

        mock_api.delete.assert_awaited_once_with("/super-admin/schools/school-1")


class TestUsersAndBilling:
    """Tests for users, billing and settings."""

    @pytest.mark.asyncio
    async def test_update_user_status(self, admin_service, mock_api):
        """Test user status changes are sent with PUT."""
        mock_api.put.return_value = {"id": "u-1", "email": "t@g.edu", "role": "teacher", "status": "suspended"}

        user = await admin_service.update_user_status("u-1", "suspended")

        mock_api.put.assert_awaited_once_with(
            "/super-admin/users/u-1/status", json={"status": "suspended"}
        )
        assert user.status == "suspended"

    @pytest.mark.asyncio
    async def test_billing_range_needs_both_ends(self, admin_service, mock_api):
        """Test the date range is only sent when complete."""
        mock_api.get.return_value = []

        await admin_service.list_billing(status="paid", start_date=date(2024, 1, 1))
        await admin_service.list_billing(start_date=date(2024, 1, 1), end_date=date(2024, 3, 31))

        first, second = mock_api.get.await_args_list
        assert first.kwargs["params"] == {"status": "paid"}
        assert second.kwargs["params"] == {"startDate": "2024-01-01", "endDate": "2024-03-31"}

    @pytest.mark.asyncio
    async def test_update_settings(self, admin_service, mock_api):
        """Test settings are sent as camelCase payloads."""
        setting = PlatformSetting(key="trialDays", value="30", category="billing")
        mock_api.put.return_value = [setting.to_payload()]

        updated = await admin_service.update_settings([setting])

        mock_api.put.assert_awaited_once_with(
            "/super-admin/settings",
            json=[{"key": "trialDays", "value": "30", "category": "billing", "isActive": True}],
        )
        assert updated == [setting]

    @pytest.mark.asyncio
    async def test_health(self, admin_service, mock_api):
        """Test the health check is parsed."""
        mock_api.get.return_value = {"status": "healthy", "uptime": 12.5, "version": "1.0.0"}

        health = await admin_service.get_health()

        mock_api.get.assert_awaited_once_with("/super-admin/health", params=None)
        assert health.status == "healthy"
