# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Add/edit academic year form.

AcademicYearForm holds the state of one open form: the draft being edited,
its field errors and the add/edit mode. Submitting validates first and only
then issues a single create or update request.

Example:
    >>> form = AcademicYearForm(service, school_id="s-1")
    >>> form.change("name", "2024-25")
    >>> outcome = await form.submit()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.domains.academic_year.policy import FieldErrors
from src.domains.academic_year.service import (
    AcademicYearCurrentError,
    AcademicYearService,
    AcademicYearServiceError,
    AcademicYearValidationError,
)
from src.models.academic_year import AcademicYearDraft

logger = logging.getLogger(__name__)

LIST_ROUTE = "/master/academic-years"


class FormMode(str, Enum):
    ADD = "add"
    EDIT = "edit"


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of a submit attempt.

    Attributes:
        success: Whether the backend accepted the form.
        message: Message to show the user.
        redirect_to: Route to navigate to on success.
    """

    success: bool
    message: str
    redirect_to: str | None = None


class AcademicYearForm:
    """State and actions of the academic year add/edit form.

    Attributes:
        service: Academic year service used for load and submit.
        mode: ADD or EDIT.
        edit_id: Year being edited (EDIT mode).
        draft: Current form input.
        errors: Field errors from the last validation.
        saving: True while a submit request is in flight.
        loading: True while an edit record is being fetched.
    """

    def __init__(
        self,
        service: AcademicYearService,
        school_id: str = "",
        mode: FormMode = FormMode.ADD,
        edit_id: str | None = None,
    ) -> None:
        if mode is FormMode.EDIT and not school_id.strip():
            raise ValueError("An edit form needs the school that owns the year")
        self.service = service
        self.mode = mode
        self.edit_id = edit_id
        self.draft = AcademicYearDraft(school_id=school_id)
        self.errors: FieldErrors = {}
        self.saving = False
        self.loading = False
        self._default_school_id = school_id

    @property
    def is_edit(self) -> bool:
        return self.mode is FormMode.EDIT and bool(self.edit_id)

    async def load(self) -> bool:
        """Fill the draft from the record being edited.

        Returns:
            True if the record was loaded; the draft is untouched otherwise.
        """
        if not self.is_edit:
            return False

        self.loading = True
        try:
            record = await self.service.get_academic_year(self.draft.school_id, self.edit_id)
        except AcademicYearServiceError as e:
            logger.error("Failed to load academic year %s: %s", self.edit_id, e)
            return False
        finally:
            self.loading = False

        self.draft = AcademicYearDraft.from_record(record)
        return True

    def change(self, field: str, value: Any) -> None:
        """Set a draft field and clear that field's error.

        Changing the school also clears the selected branch.

        Args:
            field: Draft field name.
            value: New value.

        Raises:
            AttributeError: If the draft has no such field.
        """
        if field not in AcademicYearDraft.model_fields:
            raise AttributeError(f"Unknown academic year field: {field}")

        updates: dict[str, Any] = {field: value}
        if field == "school_id":
            updates["branch_id"] = ""
        self.draft = self.draft.model_copy(update=updates)
        self.errors.pop(field, None)

    def validate(self) -> bool:
        """Validate the whole draft.

        Returns:
            True when there are no field errors.
        """
        self.errors = self.service.policy.validate_form(self.draft)
        return not self.errors

    def reset(self) -> None:
        """Clear the form back to an empty add form."""
        self.draft = AcademicYearDraft(school_id=self._default_school_id)
        self.errors = {}

    async def submit(self) -> SubmitOutcome:
        """Validate and send the form.

        An invalid form sends nothing. A valid form sends exactly one create
        (ADD) or update (EDIT) request; on success an add form is cleared.
        A year that was saved but could not be made current still counts as
        saved, so a retry never creates it twice.

        Returns:
            Outcome to show the user.
        """
        if not self.validate():
            return SubmitOutcome(success=False, message="Please fix the highlighted fields")

        verb = "update" if self.is_edit else "create"
        self.saving = True
        try:
            if self.is_edit:
                await self.service.update_academic_year(self.edit_id, self.draft)
                message = "Academic year updated successfully"
            else:
                await self.service.create_academic_year(self.draft)
                message = "Academic year created successfully"
        except AcademicYearValidationError as e:
            self.errors = e.errors
            return SubmitOutcome(success=False, message="Please fix the highlighted fields")
        except AcademicYearCurrentError as e:
            logger.warning("Academic year %s saved but not made current: %s", e.record.id, e)
            message = f"Academic year {verb}d, but it could not be made current"
        except AcademicYearServiceError as e:
            logger.error("Failed to %s academic year: %s", verb, e)
            return SubmitOutcome(success=False, message=f"Failed to {verb} academic year")
        finally:
            self.saving = False

        if not self.is_edit:
            self.reset()
        return SubmitOutcome(success=True, message=message, redirect_to=LIST_ROUTE)
