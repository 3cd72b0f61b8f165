"""Resident DTOs: pure Pydantic, zero HTTP imports."""
from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum

from pydantic import Field, field_validator

from bluemoon.api.schemas.common import BackendModel, FormModel, HouseholdRef

_DIGITS = re.compile(r"^\d+$")


class GenderDTO(str, Enum):
    MALE = "male"
    FEMALE = "female"


GENDER_LABELS = {GenderDTO.MALE: "Nam", GenderDTO.FEMALE: "Nữ"}


class ResidentRead(BackendModel):
    id: str = Field(alias="_id")
    full_name: str
    id_card: str | None = None
    date_of_birth: datetime | None = None
    gender: GenderDTO | None = None
    phone: str | None = None
    household: HouseholdRef | None = None
    active: bool = True
    id_card_date: datetime | None = None
    id_card_place: str | None = None
    place_of_birth: str | None = None
    nationality: str | None = None
    ethnicity: str | None = None
    religion: str | None = None
    occupation: str | None = None
    workplace: str | None = None
    note: str | None = None
    is_household_head: bool = False


class ResidentForm(FormModel):
    """Shared by the create and edit dialogs."""

    full_name: str = ""
    gender: GenderDTO | None = None
    date_of_birth: date | None = None
    id_card: str = ""
    id_card_date: date | None = None
    id_card_place: str = ""
    place_of_birth: str = ""
    nationality: str = "Việt Nam"
    ethnicity: str = "Kinh"
    religion: str = "Không"
    occupation: str = ""
    workplace: str = ""
    phone: str = ""
    household_id: str | None = None
    note: str = ""
    active: bool = True

    @field_validator("full_name")
    @classmethod
    def full_name_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Họ tên là bắt buộc")
        return v

    @field_validator("gender")
    @classmethod
    def gender_required(cls, v: GenderDTO | None) -> GenderDTO:
        if v is None:
            raise ValueError("Giới tính là bắt buộc")
        return v

    @field_validator("id_card")
    @classmethod
    def id_card_digits(cls, v: str) -> str:
        if v and not _DIGITS.match(v):
            raise ValueError("CMND/CCCD chỉ được chứa số")
        return v

    @field_validator("phone")
    @classmethod
    def phone_digits(cls, v: str) -> str:
        if v and not _DIGITS.match(v):
            raise ValueError("Số điện thoại chỉ được chứa số")
        return v

    @classmethod
    def from_resident(cls, resident: ResidentRead) -> "ResidentForm":
        """Seed the edit dialog without re-validating what the backend holds."""
        return cls.model_construct(
            full_name=resident.full_name,
            gender=resident.gender,
            date_of_birth=resident.date_of_birth.date() if resident.date_of_birth else None,
            id_card=resident.id_card or "",
            id_card_date=resident.id_card_date.date() if resident.id_card_date else None,
            id_card_place=resident.id_card_place or "",
            place_of_birth=resident.place_of_birth or "",
            nationality=resident.nationality or "",
            ethnicity=resident.ethnicity or "",
            religion=resident.religion or "",
            occupation=resident.occupation or "",
            workplace=resident.workplace or "",
            phone=resident.phone or "",
            household_id=resident.household.id if resident.household else None,
            note=resident.note or "",
            active=resident.active,
        )

    def to_payload(self) -> dict:
        payload = {
            "fullName": self.full_name,
            "gender": self.gender.value if self.gender else None,
            "dateOfBirth": self.date_of_birth.isoformat() if self.date_of_birth else "",
            "idCard": self.id_card,
            "idCardDate": self.id_card_date.isoformat() if self.id_card_date else "",
            "idCardPlace": self.id_card_place,
            "placeOfBirth": self.place_of_birth,
            "nationality": self.nationality,
            "ethnicity": self.ethnicity,
            "religion": self.religion,
            "occupation": self.occupation,
            "workplace": self.workplace,
            "phone": self.phone,
            "note": self.note,
            "active": self.active,
        }
        if self.household_id:
            payload["household"] = self.household_id
        return payload
