"""Display labels and badge colors for backend enum values."""
from __future__ import annotations

from typing import NamedTuple


class Badge(NamedTuple):
    label: str
    color: str


FEE_TYPE_LABELS: dict[str, str] = {
    "mandatory": "Bắt buộc",
    "service": "Dịch vụ",
    "maintenance": "Bảo trì",
    "voluntary": "Tự nguyện",
    "contribution": "Đóng góp",
    "parking": "Đỗ xe",
    "utilities": "Tiện ích",
}

# The payment search screen offers a wider set of types and falls back to "Khác".
SEARCH_FEE_TYPE_LABELS: dict[str, str] = {
    "service": "Dịch vụ",
    "maintenance": "Bảo trì",
    "water": "Nước",
    "electricity": "Điện",
    "parking": "Đỗ xe",
    "internet": "Internet",
    "security": "An ninh",
    "cleaning": "Vệ sinh",
    "contribution": "Đóng góp",
    "mandatory": "Bắt buộc",
    "other": "Khác",
}

PAYMENT_METHOD_LABELS: dict[str, str] = {
    "cash": "Tiền mặt",
    "bank_transfer": "Chuyển khoản",
    "card": "Thẻ",
}

ROLE_LABELS: dict[str, str] = {
    "admin": "Quản trị viên",
    "manager": "Quản lý",
    "accountant": "Kế toán",
}

_PAYMENT_STATUS_BADGES: dict[str, Badge] = {
    "paid": Badge("Đã thanh toán", "green"),
    "overdue": Badge("Quá hạn", "red"),
}
_PENDING = Badge("Chưa thanh toán", "orange")
_NOT_APPLICABLE = Badge("Không áp dụng", "gray")


def fee_type_label(fee_type: str) -> str:
    return FEE_TYPE_LABELS.get(fee_type, fee_type)


def search_fee_type_label(fee_type: str) -> str:
    return SEARCH_FEE_TYPE_LABELS.get(fee_type, "Khác")


def payment_method_label(method: str) -> str:
    return PAYMENT_METHOD_LABELS.get(method, "Khác")


def role_label(role: str) -> str:
    return ROLE_LABELS.get(role, role)


def payment_status_badge(status: str) -> Badge:
    """Badge for payment lists; anything unknown reads as pending."""
    return _PAYMENT_STATUS_BADGES.get(status, _PENDING)


def fee_status_badge(status: str | None) -> Badge:
    """Badge for a household's per-fee status, which has a 'not applicable' case."""
    if status == "pending":
        return _PENDING
    return _PAYMENT_STATUS_BADGES.get(status or "", _NOT_APPLICABLE)


def active_badge(active: bool) -> Badge:
    return Badge("Hoạt động", "green") if active else Badge("Không hoạt động", "red")
