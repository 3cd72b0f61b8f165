"""User and session DTOs: pure Pydantic, zero HTTP imports."""
from __future__ import annotations

from enum import Enum

from pydantic import Field, ValidationInfo, field_validator

from bluemoon.api.schemas.common import BackendModel, FormModel

MIN_PASSWORD_LENGTH = 6


class RoleDTO(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    ACCOUNTANT = "accountant"


class UserRead(BackendModel):
    id: str = Field(alias="_id")
    username: str
    full_name: str = ""
    role: str = RoleDTO.ACCOUNTANT.value
    email: str | None = None
    phone: str | None = None
    active: bool = True


class LoginRequest(BackendModel):
    username: str
    password: str


class SessionUser(BackendModel):
    """The ``/users/login`` response: the user fields plus a bearer token."""

    id: str = Field(alias="_id")
    username: str
    full_name: str = ""
    role: str = RoleDTO.ACCOUNTANT.value
    token: str


class UserForm(FormModel):
    username: str = ""
    full_name: str = ""
    role: str = RoleDTO.ACCOUNTANT.value
    email: str = ""
    phone: str = ""
    active: bool = True
    # The edit screen leaves the password untouched unless one is typed in.
    password_required: bool = False
    password: str = ""
    confirm_password: str = ""

    @field_validator("username")
    @classmethod
    def username_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Tên đăng nhập là bắt buộc")
        return v

    @field_validator("full_name")
    @classmethod
    def full_name_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Họ tên là bắt buộc")
        return v

    @field_validator("role")
    @classmethod
    def role_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Vai trò là bắt buộc")
        return v

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str, info: ValidationInfo) -> str:
        if not v and info.data.get("password_required"):
            raise ValueError("Mật khẩu là bắt buộc")
        if v and len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Mật khẩu phải có ít nhất {MIN_PASSWORD_LENGTH} ký tự")
        return v

    @field_validator("confirm_password")
    @classmethod
    def password_confirmed(cls, v: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password and password != v:
            raise ValueError("Mật khẩu xác nhận không khớp")
        return v

    def to_payload(self) -> dict:
        payload = {
            "username": self.username,
            "fullName": self.full_name,
            "role": self.role,
            "email": self.email,
            "phone": self.phone,
            "active": self.active,
        }
        if self.password:
            payload["password"] = self.password
        return payload
