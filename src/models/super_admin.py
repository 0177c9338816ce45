# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Super-admin dashboard and platform management models.

Aggregates are computed by the backend with SQL, so counts and sums may
arrive as strings; the numeric fields below coerce them.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from src.models.common import APIModel


class PlatformOverview(APIModel):
    """Platform-wide counters."""

    total_schools: int = 0
    active_schools: int = 0
    total_users: int = 0
    total_revenue: Decimal = Decimal("0")
    monthly_revenue: Decimal = Decimal("0")


class RoleCount(APIModel):
    role: str
    count: int = 0


class PlanRevenue(APIModel):
    plan: str | None = None
    schools: int = 0
    revenue: Decimal | None = None


class PlatformAnalytics(APIModel):
    """Response of ``GET /super-admin/analytics``."""

    overview: PlatformOverview = Field(default_factory=PlatformOverview)
    users_by_role: list[RoleCount] = Field(default_factory=list)
    revenue_by_plan: list[PlanRevenue] = Field(default_factory=list)


class RevenuePoint(APIModel):
    """Paid billing aggregated over one period."""

    period: str | None = None
    revenue: Decimal = Decimal("0")
    transactions: int = 0


class RegionStats(APIModel):
    """Schools aggregated by state."""

    state: str | None = None
    schools: int = 0
    users: int | None = None
    revenue: Decimal | None = None


class PlatformSchool(APIModel):
    """School as listed on the super-admin schools screen."""

    id: str
    name: str
    location: str | None = None
    state: str | None = None
    principal: str | None = None
    email: str | None = None
    phone: str | None = None
    students: int = 0
    teachers: int = 0
    plan: str | None = None
    status: str | None = None
    monthly_revenue: Decimal | None = None
    joined_date: datetime | None = None


class PlatformUser(APIModel):
    id: str
    email: str
    role: str
    name: str | None = None
    status: str | None = None
    school_id: str | None = None


class BillingRecord(APIModel):
    id: str
    amount: Decimal
    status: str
    school_id: str | None = None
    plan: str | None = None
    due_date: date | None = None
    paid_date: date | None = None


class PlatformSetting(APIModel):
    key: str
    value: str
    category: str | None = None
    is_active: bool = True


class DashboardOverview(APIModel):
    """Response of ``GET /super-admin/dashboard``."""

    analytics: PlatformAnalytics = Field(default_factory=PlatformAnalytics)
    recent_schools: list[PlatformSchool] = Field(default_factory=list)
    recent_billing: list[BillingRecord] = Field(default_factory=list)


class SystemHealth(APIModel):
    status: str
    timestamp: datetime | None = None
    uptime: float | None = None
    version: str | None = None
