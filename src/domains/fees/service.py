# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fee collection service for the accountant screens.

This module provides the FeeCollectionService class for:
- Listing students with their fee status
- Reading the collectable fee items
- Collecting a payment and returning its receipt
- Listing defaulters
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pydantic import ValidationError

from src.domains.master.validation import validate_fee_payment
from src.infrastructure.api.client import ApiClient, ApiError
from src.infrastructure.api.fetcher import DataFetcher, FetchResult
from src.infrastructure.fallback import datasets
from src.models.fees import (
    Defaulter,
    FeeCollectionRequest,
    FeeItem,
    FeePaymentStatus,
    FeeReceipt,
    PaymentMethod,
    StudentFeeStatus,
)

logger = logging.getLogger(__name__)


class FeeServiceError(Exception):
    """Base exception for fee service errors."""

    pass


class FeeValidationError(FeeServiceError):
    """Raised when a payment fails validation; nothing was sent.

    Attributes:
        errors: Field errors keyed by payload key.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


@dataclass(frozen=True)
class FeeTotals:
    """Collected and outstanding amounts over a set of students."""

    total: Decimal
    collected: Decimal
    pending: Decimal


class FeeCollectionService:
    """Service for the accountant fee collection workflow.

    Attributes:
        api: Backend API client.
        fetcher: Fetch helper applying demo-data fallback to listings.
    """

    def __init__(self, api: ApiClient, fetcher: DataFetcher) -> None:
        self.api = api
        self.fetcher = fetcher

    async def list_fee_status(
        self,
        status: FeePaymentStatus | None = None,
    ) -> FetchResult[list[StudentFeeStatus]]:
        """List students with their fee status.

        Args:
            status: Only return students in this status.

        Returns:
            Students tagged live or fallback.
        """
        params = {"status": status.value} if status else None
        try:
            result = await self.fetcher.fetch(
                "fee status",
                lambda: self.api.get("/accountant/students/fee-status", params=params),
                fallback=datasets.fee_status,
            )
        except ApiError as e:
            raise FeeServiceError(e.message) from e
        students = [StudentFeeStatus.model_validate(item) for item in result.data or []]
        if status and result.is_fallback:
            students = [s for s in students if s.fee_status.status is status]
        return FetchResult(data=students, source=result.source, error=result.error)

    async def get_fee_structure(self) -> FetchResult[list[FeeItem]]:
        """List the fee items that can be collected."""
        try:
            result = await self.fetcher.fetch(
                "fee structure",
                lambda: self.api.get("/accountant/fee-structure"),
                fallback=datasets.fee_structure,
            )
        except ApiError as e:
            raise FeeServiceError(e.message) from e
        items = [FeeItem.model_validate(item) for item in result.data or []]
        return FetchResult(data=items, source=result.source, error=result.error)

    def build_request(
        self,
        student_id: str,
        amount: float,
        fee_types: list[str],
        payment_method: PaymentMethod = PaymentMethod.CASH,
        remarks: str | None = None,
    ) -> FeeCollectionRequest:
        """Validate a payment and convert it to a request body.

        Raises:
            FeeValidationError: If the payment is invalid.
        """
        errors = validate_fee_payment(
            {"studentId": student_id, "amount": amount, "feeTypes": fee_types}
        )
        if not errors and amount <= 0:
            errors["amount"] = "Amount must be greater than zero"
        if errors:
            raise FeeValidationError(errors)

        try:
            return FeeCollectionRequest(
                student_id=student_id,
                amount=amount,
                payment_method=payment_method,
                remarks=remarks or None,
                fee_types=fee_types,
            )
        except ValidationError as e:
            raise FeeServiceError(f"Invalid payment data: {e}") from e

    async def collect_fee(
        self,
        student_id: str,
        amount: float,
        fee_types: list[str],
        payment_method: PaymentMethod = PaymentMethod.CASH,
        remarks: str | None = None,
    ) -> FeeReceipt:
        """Collect a payment from a student.

        Args:
            student_id: Paying student.
            amount: Amount paid, greater than zero and at most 1,000,000.
            fee_types: Fee item ids the payment covers.
            payment_method: How the payment was made.
            remarks: Free-text note printed on the receipt.

        Returns:
            Receipt issued by the backend.

        Raises:
            FeeValidationError: If the payment is invalid.
            FeeServiceError: If the backend rejects the payment.
        """
        request = self.build_request(student_id, amount, fee_types, payment_method, remarks)

        try:
            data = await self.api.post("/accountant/collect-fee", json=request.to_payload())
        except ApiError as e:
            raise FeeServiceError(e.message) from e

        receipt = FeeReceipt.model_validate(data)
        logger.info(
            "Collected %.2f from student %s, receipt %s",
            request.amount,
            student_id,
            receipt.receipt_number,
        )
        return receipt

    async def list_defaulters(self) -> list[Defaulter]:
        """List students with overdue fees.

        Raises:
            FeeServiceError: If the backend call fails.
        """
        try:
            data = await self.api.get("/accountant/defaulters")
        except ApiError as e:
            raise FeeServiceError(e.message) from e

        return [Defaulter.model_validate(item) for item in data or []]

    @staticmethod
    def search(students: Iterable[StudentFeeStatus], term: str) -> list[StudentFeeStatus]:
        """Filter students by name or admission number (case-insensitive)."""
        needle = term.strip().lower()
        if not needle:
            return list(students)
        return [
            student
            for student in students
            if needle in student.full_name.lower() or needle in student.admission_number.lower()
        ]

    @staticmethod
    def totals(students: Iterable[StudentFeeStatus]) -> FeeTotals:
        total = collected = pending = Decimal("0")
        for student in students:
            total += student.fee_status.total_amount
            collected += student.fee_status.paid_amount
            pending += student.fee_status.pending_amount
        return FeeTotals(total=total, collected=collected, pending=pending)
