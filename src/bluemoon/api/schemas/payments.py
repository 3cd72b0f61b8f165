"""Payment DTOs: pure Pydantic, zero HTTP imports."""
from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from bluemoon.api.schemas.common import BackendModel, FeeRef, FormModel, HouseholdRef, PersonRef


class PaymentStatusDTO(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


class PaymentMethodDTO(str, Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CARD = "card"
    OTHER = "other"


class CollectorRef(PersonRef):
    name: str = ""


class PaymentRead(BackendModel):
    id: str = Field(alias="_id")
    fee: FeeRef | None = None
    household: HouseholdRef | None = None
    amount: float = 0
    method: str = PaymentMethodDTO.CASH.value
    status: str = PaymentStatusDTO.PAID.value
    payment_date: datetime | None = None
    due_date: datetime | None = None
    collector: CollectorRef | None = None
    note: str | None = None
    receipt_number: str | None = None
    payer_name: str | None = None
    payer_id: str | None = None
    payer_phone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PaymentForm(FormModel):
    household_id: str = ""
    fee_id: str = ""
    amount: float | None = None
    payment_date: date | None = None
    payer_name: str = ""
    payer_id: str = ""
    payer_phone: str = ""
    receipt_number: str = ""
    note: str = ""

    @field_validator("household_id")
    @classmethod
    def household_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Vui lòng chọn hộ gia đình")
        return v

    @field_validator("fee_id")
    @classmethod
    def fee_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Vui lòng chọn loại phí")
        return v

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: float | None) -> float:
        if v is None or v <= 0:
            raise ValueError("Số tiền phải lớn hơn 0")
        return v

    @field_validator("payment_date")
    @classmethod
    def payment_date_required(cls, v: date | None) -> date:
        if v is None:
            raise ValueError("Vui lòng chọn ngày thanh toán")
        return v

    def to_payload(self) -> dict:
        return {
            "household": self.household_id,
            "fee": self.fee_id,
            "amount": self.amount,
            "paymentDate": self.payment_date.isoformat(),
            "payerName": self.payer_name,
            "payerId": self.payer_id,
            "payerPhone": self.payer_phone,
            "receiptNumber": self.receipt_number,
            "note": self.note,
        }


class PaymentSearchQuery(BaseModel):
    """Optional search fields; only the filled-in ones reach the query string."""

    apartment_number: str = ""
    payer_name: str = ""
    fee_name: str = ""
    fee_type: str = ""
    start_date: date | None = None
    end_date: date | None = None
    min_amount: float | None = None
    max_amount: float | None = None

    def to_params(self) -> dict[str, str]:
        raw = {
            "apartmentNumber": self.apartment_number,
            "feeName": self.fee_name,
            "feeType": self.fee_type,
            "startDate": self.start_date.isoformat() if self.start_date else "",
            "endDate": self.end_date.isoformat() if self.end_date else "",
            "minAmount": _amount_param(self.min_amount),
            "maxAmount": _amount_param(self.max_amount),
            "payerName": self.payer_name,
        }
        return {k: v for k, v in raw.items() if v}


def _amount_param(value: float | None) -> str:
    if value is None:
        return ""
    return str(int(value)) if float(value).is_integer() else str(value)
