# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for date helpers."""

from datetime import date, datetime

import pytest

from src.utils.datetime import format_date, parse_date, whole_months_between


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize(
        "value",
        ["2024-04-01", " 2024-04-01 ", "2024-04-01T00:00:00Z", "2024-04-01T10:30:00+05:30"],
    )
    def test_accepts_dates_and_timestamps(self, value):
        """Test dashed dates and ISO timestamps give the calendar date."""
        assert parse_date(value) == date(2024, 4, 1)

    def test_passes_date_objects_through(self):
        """Test date and datetime values need no parsing."""
        assert parse_date(date(2024, 4, 1)) == date(2024, 4, 1)
        assert parse_date(datetime(2024, 4, 1, 9, 0)) == date(2024, 4, 1)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_none(self, value):
        """Test missing input parses to None."""
        assert parse_date(value) is None

    @pytest.mark.parametrize(
        "value",
        ["20240401", "2024-W14-1", "2024-092", "2024-13-01", "20240401T000000"],
    )
    def test_rejects_other_forms(self, value):
        """Test anything but YYYY-MM-DD raises ValueError."""
        with pytest.raises(ValueError):
            parse_date(value)


class TestFormatting:
    """Tests for formatting and month arithmetic."""

    def test_format_date(self):
        """Test dates format as YYYY-MM-DD and None as empty."""
        assert format_date(date(2024, 4, 1)) == "2024-04-01"
        assert format_date(None) == ""

    def test_whole_months_between(self):
        """Test month boundaries are counted regardless of day."""
        assert whole_months_between(date(2024, 4, 1), date(2025, 3, 31)) == 11
        assert whole_months_between(date(2024, 4, 30), date(2024, 5, 1)) == 1
