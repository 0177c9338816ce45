# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Field validation for master data forms.

Validators take the camelCase payload about to be sent and return a
field -> message map; an empty map means the payload may be sent.
"""

import re
from collections.abc import Mapping
from datetime import date
from typing import Any

from src.utils.datetime import parse_date, today

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[6-9][0-9]{9}")
ROLL_NUMBER_PATTERN = re.compile(r"[A-Z0-9]{3,10}")
MIN_STUDENT_AGE = 3
MAX_STUDENT_AGE = 100


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return str(value).strip() if value is not None else ""


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(value))


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_PATTERN.fullmatch(value))


def age_on(birth_date: date, on: date) -> int:
    """Age in completed years on a given day."""
    years = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def validate_student(data: Mapping[str, Any], on: date | None = None) -> dict[str, str]:
    """Validate a student payload before create/update.

    Args:
        data: camelCase student payload.
        on: Day ages are computed for (defaults to today).

    Returns:
        Field errors keyed by payload key.
    """
    errors: dict[str, str] = {}

    first_name = _text(data, "firstName")
    if not first_name:
        errors["firstName"] = "Student name is required"
    elif len(first_name) < 2:
        errors["firstName"] = "Name must be at least 2 characters"

    email = _text(data, "parentEmail")
    if not email:
        errors["parentEmail"] = "Email is required"
    elif not is_valid_email(email):
        errors["parentEmail"] = "Please enter a valid email"

    phone = _text(data, "parentPhone")
    if phone and not is_valid_phone(phone):
        errors["parentPhone"] = "Please enter a valid 10-digit phone number"

    roll_number = _text(data, "rollNumber")
    if not roll_number:
        errors["rollNumber"] = "Roll number is required"
    elif not ROLL_NUMBER_PATTERN.fullmatch(roll_number):
        errors["rollNumber"] = "Roll number must be 3-10 alphanumeric characters"

    if data.get("dateOfBirth"):
        try:
            birth_date = parse_date(data["dateOfBirth"])
        except ValueError:
            errors["dateOfBirth"] = "Date of birth is not a valid date"
        else:
            age = age_on(birth_date, on or today())
            if not MIN_STUDENT_AGE <= age <= MAX_STUDENT_AGE:
                errors["dateOfBirth"] = (
                    f"Age must be between {MIN_STUDENT_AGE} and {MAX_STUDENT_AGE}"
                )

    return errors


def validate_teacher(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate a teacher payload before create/update."""
    errors: dict[str, str] = {}

    if len(_text(data, "firstName")) < 2:
        errors["firstName"] = "Name must be at least 2 characters"

    email = _text(data, "email")
    if email and not is_valid_email(email):
        errors["email"] = "Please enter a valid email"

    phone = _text(data, "phone")
    if phone and not is_valid_phone(phone):
        errors["phone"] = "Please enter a valid 10-digit phone number"

    return errors


def validate_fee_structure(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate a fee structure payload before create/update."""
    errors: dict[str, str] = {}

    if not _text(data, "feeName"):
        errors["feeName"] = "Fee name is required"

    try:
        amount = float(data.get("amount"))
    except (TypeError, ValueError):
        errors["amount"] = "Amount is required"
    else:
        if not 0 <= amount <= 1_000_000:
            errors["amount"] = "Please enter a valid amount (0-1,000,000)"

    return errors


def validate_fee_payment(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate a fee payment before it is collected.

    Args:
        data: camelCase payment with ``studentId``, ``amount`` and
            ``feeTypes`` (or a single ``feeType``).

    Returns:
        Field errors keyed by payload key.
    """
    errors: dict[str, str] = {}

    if not _text(data, "studentId"):
        errors["studentId"] = "Student is required"

    try:
        amount = float(data.get("amount"))
    except (TypeError, ValueError):
        errors["amount"] = "Please enter a valid amount (0-1,000,000)"
    else:
        if not 0 <= amount <= 1_000_000:
            errors["amount"] = "Please enter a valid amount (0-1,000,000)"

    fee_types = data.get("feeTypes") or ([data["feeType"]] if data.get("feeType") else [])
    if not fee_types:
        errors["feeTypes"] = "Fee type is required"

    return errors
