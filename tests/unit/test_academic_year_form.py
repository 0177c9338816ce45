# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the academic year add/edit form."""

import pytest

from src.domains.academic_year.form import LIST_ROUTE, AcademicYearForm, FormMode
from src.domains.academic_year.policy import AcademicYearErrorCode, AcademicYearPolicy
from src.domains.academic_year.service import AcademicYearService
from src.infrastructure.api.client import ApiNotFoundError, ApiResponseError


@pytest.fixture
def service(mock_api, fetcher, fixed_today):
    """Create academic year service with mock API client."""
    return AcademicYearService(
        api=mock_api,
        fetcher=fetcher,
        policy=AcademicYearPolicy(clock=lambda: fixed_today),
    )


def fill(form: AcademicYearForm) -> None:
    form.change("name", "2024-25")
    form.change("start_date", "2024-04-01")
    form.change("end_date", "2025-03-31")


class TestFormChange:
    """Tests for editing form fields."""

    def test_change_sets_field_and_clears_its_error(self, service):
        """Test changing a field drops only that field's error."""
        form = AcademicYearForm(service)
        form.validate()
        assert {"name", "school_id"} <= set(form.errors)

        form.change("name", "2024-25")

        assert form.draft.name == "2024-25"
        assert "name" not in form.errors
        assert "school_id" in form.errors

    def test_changing_school_clears_branch(self, service):
        """Test a new school resets the selected branch."""
        form = AcademicYearForm(service, school_id="school-1")
        form.change("branch_id", "branch-1")

        form.change("school_id", "school-2")

        assert form.draft.school_id == "school-2"
        assert form.draft.branch_id == ""

    def test_unknown_field(self, service):
        """Test changing a field the draft does not have fails."""
        form = AcademicYearForm(service)

        with pytest.raises(AttributeError):
            form.change("colour", "blue")


class TestFormSubmit:
    """Tests for submitting the form."""

    @pytest.mark.asyncio
    async def test_valid_add_sends_one_create(self, service, mock_api, sample_year_data):
        """Test a valid add form sends one POST, clears and redirects."""
        mock_api.post.return_value = sample_year_data
        form = AcademicYearForm(service, school_id="school-1")
        fill(form)

        outcome = await form.submit()

        assert outcome.success is True
        assert outcome.message == "Academic year created successfully"
        assert outcome.redirect_to == LIST_ROUTE
        mock_api.post.assert_awaited_once()
        assert form.draft.name == ""
        assert form.draft.school_id == "school-1"
        assert form.saving is False

    @pytest.mark.asyncio
    async def test_invalid_form_sends_nothing(self, service, mock_api):
        """Test an invalid form makes no request and keeps its input."""
        form = AcademicYearForm(service, school_id="school-1")
        fill(form)
        form.change("end_date", "2024-06-01")

        outcome = await form.submit()

        assert outcome.success is False
        assert outcome.message == "Please fix the highlighted fields"
        assert form.errors["end_date"].code == AcademicYearErrorCode.DURATION
        assert form.draft.name == "2024-25"
        mock_api.post.assert_not_awaited()
        mock_api.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_school_blocks_submit(self, service, mock_api):
        """Test a form without a school is never sent."""
        form = AcademicYearForm(service)
        fill(form)

        outcome = await form.submit()

        assert outcome.success is False
        assert "school_id" in form.errors
        mock_api.post.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_backend_failure_keeps_input(self, service, mock_api):
        """Test a rejected create reports failure and keeps the draft."""
        mock_api.post.side_effect = ApiResponseError("POST failed (500)", 500, "boom")
        form = AcademicYearForm(service, school_id="school-1")
        fill(form)

        outcome = await form.submit()

        assert outcome.success is False
        assert outcome.message == "Failed to create academic year"
        assert outcome.redirect_to is None
        assert form.draft.name == "2024-25"

    @pytest.mark.asyncio
    async def test_created_but_not_made_current(self, service, mock_api, sample_year_data):
        """Test a year saved before set-current fails is reported as created."""
        mock_api.post.side_effect = [
            sample_year_data,
            ApiResponseError("POST failed (500): boom", 500, "boom"),
        ]
        form = AcademicYearForm(service, school_id="school-1")
        fill(form)
        form.change("is_current", True)

        outcome = await form.submit()

        assert outcome.success is True
        assert outcome.message == "Academic year created, but it could not be made current"
        assert outcome.redirect_to == LIST_ROUTE
        assert form.draft.name == ""
        assert mock_api.post.await_args_list[0].args == ("/schools/school-1/academic-years",)
        assert mock_api.post.await_args_list[1].args == (
            "/schools/school-1/academic-years/ay-1/set-current",
        )

        retry = await form.submit()

        assert retry.success is False
        assert mock_api.post.await_count == 2


class TestFormEdit:
    """Tests for the edit mode of the form."""

    @pytest.mark.asyncio
    async def test_load_fills_draft(self, service, mock_api, sample_year_data):
        """Test loading copies the record into the draft."""
        mock_api.get.return_value = {**sample_year_data, "isCurrent": True}
        form = AcademicYearForm(service, school_id="school-1", mode=FormMode.EDIT, edit_id="ay-1")

        loaded = await form.load()

        assert loaded is True
        assert form.draft.name == "2024-25"
        assert form.draft.start_date == "2024-04-01"
        assert form.draft.is_current is True
        assert form.loading is False

    @pytest.mark.asyncio
    async def test_load_failure_leaves_draft(self, service, mock_api):
        """Test a failed load leaves the form empty."""
        mock_api.get.side_effect = ApiNotFoundError("GET failed (404)", 404, "Not found")
        form = AcademicYearForm(service, school_id="school-1", mode=FormMode.EDIT, edit_id="gone")

        loaded = await form.load()

        assert loaded is False
        assert form.draft.name == ""

    @pytest.mark.asyncio
    async def test_load_in_add_mode_does_nothing(self, service, mock_api):
        """Test an add form has nothing to load."""
        form = AcademicYearForm(service, school_id="school-1")

        assert await form.load() is False
        mock_api.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_submit_sends_one_update(self, service, mock_api, sample_year_data):
        """Test an edit form sends one PUT and keeps its values."""
        mock_api.get.return_value = sample_year_data
        mock_api.put.return_value = {**sample_year_data, "description": "Renamed"}
        form = AcademicYearForm(service, school_id="school-1", mode=FormMode.EDIT, edit_id="ay-1")
        await form.load()
        form.change("description", "Renamed")

        outcome = await form.submit()

        assert outcome.success is True
        assert outcome.message == "Academic year updated successfully"
        mock_api.put.assert_awaited_once()
        mock_api.post.assert_not_awaited()
        assert form.draft.description == "Renamed"

    @pytest.mark.asyncio
    async def test_updated_but_not_made_current(self, service, mock_api, sample_year_data):
        """Test an update kept by the backend is reported as updated."""
        mock_api.get.return_value = sample_year_data
        mock_api.put.return_value = sample_year_data
        mock_api.post.side_effect = ApiResponseError("POST failed (500): boom", 500, "boom")
        form = AcademicYearForm(service, school_id="school-1", mode=FormMode.EDIT, edit_id="ay-1")
        await form.load()
        form.change("is_current", True)

        outcome = await form.submit()

        assert outcome.success is True
        assert outcome.message == "Academic year updated, but it could not be made current"
        mock_api.put.assert_awaited_once()

    def test_edit_requires_school(self, service):
        """Test an edit form cannot be opened without its school."""
        with pytest.raises(ValueError, match="school"):
            AcademicYearForm(service, mode=FormMode.EDIT, edit_id="ay-1")

        with pytest.raises(ValueError):
            AcademicYearForm(service, school_id="  ", mode=FormMode.EDIT, edit_id="ay-1")
