# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fee collection models used by the accountant screens."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import Field

from src.models.common import APIModel


class FeePaymentStatus(str, Enum):
    """Fee status of a student for the running period."""

    PAID = "paid"
    PARTIAL = "partial"
    PENDING = "pending"
    OVERDUE = "overdue"


class FeeFrequency(str, Enum):
    """How often a fee item is charged."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    ONE_TIME = "one_time"


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    CHEQUE = "cheque"
    BANK_TRANSFER = "bank_transfer"


class PersonName(APIModel):
    first_name: str
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ParentContact(PersonName):
    phone: str | None = None


class FeeStatus(APIModel):
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    due_date: date | None = None
    status: FeePaymentStatus


class StudentFeeStatus(APIModel):
    """Student row on the fee collection screen."""

    id: str
    admission_number: str
    user: PersonName
    class_: str = Field(alias="class")
    section: str | None = None
    fee_status: FeeStatus
    parent: ParentContact | None = None

    @property
    def full_name(self) -> str:
        return self.user.full_name


class FeeItem(APIModel):
    """Fee line offered for collection."""

    id: str
    name: str
    amount: Decimal
    type: FeeFrequency
    mandatory: bool = False


class FeeCollectionRequest(APIModel):
    """Request body for ``POST /accountant/collect-fee``."""

    student_id: str
    amount: float = Field(..., gt=0, le=1_000_000)
    payment_method: PaymentMethod = PaymentMethod.CASH
    remarks: str | None = None
    fee_types: list[str] = Field(default_factory=list)


class FeeReceipt(APIModel):
    """Response of a successful fee collection."""

    receipt_number: str
    student_id: str | None = None
    amount: Decimal | None = None
    paid_at: datetime | None = None


class Defaulter(APIModel):
    """Student with overdue fees."""

    id: str
    student_name: str
    admission_number: str | None = None
    class_: str | None = Field(default=None, alias="class")
    pending_amount: Decimal
    days_overdue: int = 0
    parent_phone: str | None = None
