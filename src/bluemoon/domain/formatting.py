"""Number, currency and date formatting in the vi-VN conventions the screens use.

Thousands are grouped with ``.``, decimals use ``,`` and keep at most three
digits; dates render as ``d/m/yyyy`` without zero padding.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

_MAX_FRACTION_DIGITS = 3


def format_number(value: float | int | None) -> str:
    if value is None:
        return "0"
    quantized = Decimal(str(value)).quantize(
        Decimal(1).scaleb(-_MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP,
    )
    sign = "-" if quantized < 0 else ""
    integer_part, _, fraction = f"{abs(quantized):f}".partition(".")
    grouped = f"{int(integer_part):,}".replace(",", ".")
    fraction = fraction.rstrip("0")
    return f"{sign}{grouped},{fraction}" if fraction else f"{sign}{grouped}"


def format_vnd(value: float | int | None) -> str:
    """``1.500.000 VND`` on chart labels, tooltips and tables."""
    return f"{format_number(value)} VND"


def format_currency(value: float | int | None) -> str:
    """``1.500.000 ₫``, the currency style of the household detail screen."""
    return f"{format_number(round(value or 0))} ₫"


def format_date(value: date | datetime | str | None) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{value.day}/{value.month}/{value.year}"


def to_input_date(value: date | datetime | None) -> str:
    """ISO ``yyyy-mm-dd`` as expected by date inputs and the backend."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
