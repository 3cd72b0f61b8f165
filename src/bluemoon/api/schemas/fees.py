"""Fee DTOs: pure Pydantic, zero HTTP imports."""
from __future__ import annotations

from datetime import date, datetime

from pydantic import Field, field_validator

from bluemoon.api.schemas.common import BackendModel, FormModel

FEE_TYPES = (
    "mandatory", "service", "maintenance", "voluntary",
    "contribution", "parking", "utilities",
)


class FeeRead(BackendModel):
    id: str = Field(alias="_id")
    fee_code: str = ""
    name: str
    fee_type: str = "mandatory"
    amount: float = 0
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    active: bool = True


class FeeForm(FormModel):
    fee_code: str = ""
    name: str = ""
    amount: float | None = None
    fee_type: str = "mandatory"
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    active: bool = True

    @field_validator("fee_code")
    @classmethod
    def fee_code_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Mã phí là bắt buộc")
        return v

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Tên phí là bắt buộc")
        return v

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: float | None) -> float:
        if v is None or v <= 0:
            raise ValueError("Số tiền phải lớn hơn 0")
        return v

    def to_payload(self, *, is_edit: bool) -> dict:
        return {
            "feeCode": self.fee_code.strip(),
            "name": self.name.strip(),
            "amount": self.amount,
            "feeType": self.fee_type,
            "description": self.description.strip(),
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            # New fees always start active.
            "active": self.active if is_edit else True,
        }
