# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for fetch-with-fallback."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.infrastructure.api.client import ApiConnectionError, ApiResponseError
from src.infrastructure.api.fetcher import DataFetcher, DataSource


class TestDataFetcher:
    """Tests for DataFetcher.fetch."""

    @pytest.mark.asyncio
    async def test_live_result(self, fetcher):
        """Test a successful call is tagged live and skips the fallback."""
        fallback = MagicMock(return_value=["demo"])

        result = await fetcher.fetch("classes", AsyncMock(return_value=[]), fallback=fallback)

        assert result.data == []
        assert result.source is DataSource.LIVE
        assert result.error is None
        fallback.assert_not_called()

    @pytest.mark.asyncio
    async def test_fallback_on_api_error(self, fetcher, caplog):
        """Test a failed call returns demo data tagged fallback and logs it."""
        call = AsyncMock(side_effect=ApiConnectionError("GET /master/classes failed: refused"))

        with caplog.at_level("WARNING"):
            result = await fetcher.fetch("classes", call, fallback=lambda: ["demo"])

        assert result.data == ["demo"]
        assert result.is_fallback
        assert result.error == "GET /master/classes failed: refused"
        assert "Failed to fetch classes" in caplog.text

    @pytest.mark.asyncio
    async def test_no_fallback_provided(self, fetcher):
        """Test the error propagates when the caller has no demo data."""
        call = AsyncMock(side_effect=ApiResponseError("GET failed (500)", 500, "boom"))

        with pytest.raises(ApiResponseError):
            await fetcher.fetch("defaulters", call)

    @pytest.mark.asyncio
    async def test_fallback_disabled(self):
        """Test the error propagates when fallback is disabled."""
        fetcher = DataFetcher(fallback_enabled=False)
        call = AsyncMock(side_effect=ApiConnectionError("refused"))
        fallback = MagicMock(return_value=["demo"])

        with pytest.raises(ApiConnectionError):
            await fetcher.fetch("classes", call, fallback=fallback)

        fallback.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_api_errors_propagate(self, fetcher):
        """Test programming errors are never hidden by demo data."""
        call = AsyncMock(side_effect=KeyError("id"))

        with pytest.raises(KeyError):
            await fetcher.fetch("classes", call, fallback=lambda: [])
