"""Household DTOs: pure Pydantic, zero HTTP imports."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from bluemoon.api.schemas.common import BackendModel, FormModel, PersonRef


class HouseholdRead(BackendModel):
    id: str = Field(alias="_id")
    apartment_number: str
    address: str = ""
    household_head: PersonRef | None = None
    active: bool = True
    created_at: datetime | None = None
    note: str | None = None


class FeeStatusDTO(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


class FeeStatusRead(BackendModel):
    fee_id: str
    fee_name: str
    fee_type: str = ""
    amount: float = 0
    due_date: datetime | None = None
    status: str = FeeStatusDTO.PENDING.value
    payment_date: datetime | None = None
    last_month_status: str | None = None


class HouseholdFeeStatus(BackendModel):
    fee_status: list[FeeStatusRead] = Field(default_factory=list)


class HouseholdForm(FormModel):
    apartment_number: str = ""
    address: str = ""
    note: str = ""
    active: bool = True

    @field_validator("apartment_number")
    @classmethod
    def apartment_number_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Số căn hộ là bắt buộc")
        return v

    @field_validator("address")
    @classmethod
    def address_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Địa chỉ là bắt buộc")
        return v

    def to_payload(self) -> dict:
        return {
            "apartmentNumber": self.apartment_number,
            "address": self.address,
            "note": self.note,
            "active": self.active,
        }
