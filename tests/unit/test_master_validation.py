# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for master data form validators."""

from datetime import date

import pytest

from src.domains.master.validation import (
    age_on,
    validate_fee_payment,
    validate_fee_structure,
    validate_student,
    validate_teacher,
)


class TestValidateStudent:
    """Tests for student validation."""

    @pytest.fixture
    def student(self):
        return {
            "firstName": "Priya",
            "parentEmail": "parent@example.com",
            "rollNumber": "A123",
        }

    def test_valid(self, student):
        """Test a complete student has no errors."""
        assert validate_student(student) == {}

    def test_name_required(self, student):
        """Test a missing name is reported."""
        errors = validate_student({**student, "firstName": " "})

        assert errors["firstName"] == "Student name is required"

    def test_name_too_short(self, student):
        """Test one-letter names are rejected."""
        assert validate_student({**student, "firstName": "P"})["firstName"] == (
            "Name must be at least 2 characters"
        )

    @pytest.mark.parametrize(
        ("email", "message"),
        [("", "Email is required"), ("parent@", "Please enter a valid email")],
    )
    def test_email(self, student, email, message):
        """Test the parent email is required and checked."""
        assert validate_student({**student, "parentEmail": email})["parentEmail"] == message

    @pytest.mark.parametrize("phone", ["12345", "5876543210", "98765432101"])
    def test_bad_phone(self, student, phone):
        """Test phones must be ten digits starting with 6-9."""
        assert "parentPhone" in validate_student({**student, "parentPhone": phone})

    def test_good_phone(self, student):
        """Test a valid mobile number passes."""
        assert validate_student({**student, "parentPhone": "9876543210"}) == {}

    @pytest.mark.parametrize("roll", ["ab1", "A1", "ABCDEFGHIJK", "A-12"])
    def test_bad_roll_number(self, student, roll):
        """Test roll numbers must be 3-10 uppercase letters or digits."""
        assert "rollNumber" in validate_student({**student, "rollNumber": roll})

    def test_age_range(self, student):
        """Test students must be between 3 and 100 years old."""
        on = date(2024, 6, 15)

        assert validate_student({**student, "dateOfBirth": "2010-01-01"}, on=on) == {}
        assert "dateOfBirth" in validate_student({**student, "dateOfBirth": "2023-01-01"}, on=on)
        assert "dateOfBirth" in validate_student({**student, "dateOfBirth": "not a date"}, on=on)


class TestValidateTeacher:
    """Tests for teacher validation."""

    def test_valid(self):
        """Test a teacher with name and contact details passes."""
        assert validate_teacher({"firstName": "Meera", "email": "m@s.edu", "phone": "9123456789"}) == {}

    def test_invalid_fields(self):
        """Test each bad field is reported."""
        errors = validate_teacher({"firstName": "M", "email": "bad", "phone": "123"})

        assert set(errors) == {"firstName", "email", "phone"}


class TestValidateFees:
    """Tests for fee structure and payment validation."""

    def test_fee_structure(self):
        """Test fee structures need a name and an amount in range."""
        assert validate_fee_structure({"feeName": "Library", "amount": 0}) == {}
        assert set(validate_fee_structure({"amount": 2_000_000})) == {"feeName", "amount"}
        assert "amount" in validate_fee_structure({"feeName": "Library"})

    def test_fee_payment_valid(self):
        """Test a payment with student, amount and fee type passes."""
        assert validate_fee_payment({"studentId": "s-1", "amount": 5000, "feeTypes": ["1"]}) == {}

    def test_fee_payment_single_fee_type(self):
        """Test a single feeType key is accepted."""
        assert validate_fee_payment({"studentId": "s-1", "amount": 10, "feeType": "1"}) == {}

    def test_fee_payment_invalid(self):
        """Test missing student, bad amount and no fee type are reported."""
        errors = validate_fee_payment({"studentId": "", "amount": -5, "feeTypes": []})

        assert set(errors) == {"studentId", "amount", "feeTypes"}
        assert errors["amount"] == "Please enter a valid amount (0-1,000,000)"


def test_age_on_birthday_boundary():
    """Test ages count completed years only."""
    assert age_on(date(2010, 6, 16), date(2024, 6, 15)) == 13
    assert age_on(date(2010, 6, 15), date(2024, 6, 15)) == 14
