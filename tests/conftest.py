# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from datetime import date
from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.core.config.settings import clear_settings_cache
from src.infrastructure.api.client import ApiClient
from src.infrastructure.api.fetcher import DataFetcher
from src.infrastructure.session.store import InMemorySessionStore, Session


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (fake backend)"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings around each test so env patches take effect."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def fixed_today() -> date:
    """Provide the day the academic year rules are evaluated on."""
    return date(2024, 6, 15)


@pytest.fixture
def sample_school_id() -> str:
    """Provide a sample school ID for testing."""
    return "school-1"


@pytest.fixture
def session() -> Session:
    """Provide an empty in-memory session."""
    return Session(InMemorySessionStore())


@pytest.fixture
def mock_api() -> AsyncMock:
    """Create mock backend API client."""
    return AsyncMock(spec=ApiClient)


@pytest.fixture
def fetcher() -> DataFetcher:
    """Provide a fetcher with demo-data fallback enabled."""
    return DataFetcher(fallback_enabled=True)


@pytest.fixture
def strict_fetcher() -> DataFetcher:
    """Provide a fetcher that never falls back."""
    return DataFetcher(fallback_enabled=False)


@pytest.fixture
def sample_user_data() -> dict[str, Any]:
    """Provide a login user payload for testing."""
    return {
        "id": "user-1",
        "email": "admin@school.edu",
        "firstName": "Asha",
        "lastName": "Verma",
        "role": "admin",
        "schoolId": "school-1",
    }


@pytest.fixture
def sample_year_data() -> dict[str, Any]:
    """Provide an academic year payload as the backend returns it."""
    return {
        "id": "ay-1",
        "name": "2024-25",
        "startDate": "2024-04-01",
        "endDate": "2025-03-31",
        "schoolId": "school-1",
        "isActive": True,
        "isCurrent": False,
    }
