from datetime import date, datetime

import pytest

from bluemoon.domain.formatting import format_currency, format_date, format_number, format_vnd, to_input_date
from bluemoon.domain.labels import (
    active_badge,
    fee_status_badge,
    fee_type_label,
    payment_method_label,
    payment_status_badge,
    role_label,
    search_fee_type_label,
)


@pytest.mark.parametrize("value,expected", [
    (0, "0"),
    (1000, "1.000"),
    (1234567.5, "1.234.567,5"),
    (0.12345, "0,123"),
    (-2500, "-2.500"),
    (None, "0"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_currency_styles():
    assert format_vnd(1500000) == "1.500.000 VND"
    assert format_currency(1500000.4) == "1.500.000 ₫"


def test_format_date():
    assert format_date(date(2024, 3, 5)) == "5/3/2024"
    assert format_date("2024-12-25T17:00:00.000Z") == "25/12/2024"
    assert format_date(None) == ""
    assert to_input_date(datetime(2024, 3, 5, 10, 0)) == "2024-03-05"


def test_labels_fall_back():
    assert fee_type_label("parking") == "Đỗ xe"
    assert fee_type_label("custom") == "custom"
    assert search_fee_type_label("custom") == "Khác"
    assert payment_method_label("bank_transfer") == "Chuyển khoản"
    assert payment_method_label("crypto") == "Khác"
    assert role_label("accountant") == "Kế toán"


def test_badges():
    assert payment_status_badge("paid").color == "green"
    assert payment_status_badge("whatever").label == "Chưa thanh toán"
    assert fee_status_badge(None).label == "Không áp dụng"
    assert fee_status_badge("overdue").color == "red"
    assert active_badge(False).label == "Không hoạt động"
