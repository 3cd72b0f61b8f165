from datetime import date

import pytest

from bluemoon.domain.exceptions import APIError, FormValidationError
from bluemoon.services.fee_service import SAVE_MESSAGES, FeeEditor, FeeListScreen

FEE = {
    "_id": "f1", "feeCode": "QL01", "name": "Phí quản lý", "feeType": "service",
    "amount": 7000, "startDate": "2024-01-01T00:00:00.000Z", "active": False,
}


def test_filter_by_code_or_name(client, backend):
    backend.on("GET", "/api/fees", [FEE, {"_id": "f2", "feeCode": "GX", "name": "Gửi xe"}])
    screen = FeeListScreen(client)
    screen.load()
    screen.search_term = "ql"
    assert [f.id for f in screen.filtered()] == ["f1"]
    screen.search_term = "xe"
    assert [f.id for f in screen.filtered()] == ["f2"]


def test_amount_must_be_positive(client, backend):
    with pytest.raises(FormValidationError) as exc_info:
        FeeEditor(client).submit(fee_code="QL01", name="Phí quản lý", amount=0)
    assert exc_info.value.errors == {"amount": "Số tiền phải lớn hơn 0"}
    assert backend.requests == []


def test_create_forces_active_and_trims(client, backend):
    backend.on("POST", "/api/fees", FEE)
    key = FeeEditor(client).submit(
        fee_code=" QL01 ", name=" Phí quản lý ", amount=7000, active=False,
        start_date=date(2024, 1, 1),
    )
    assert key == "create_success"
    assert key in SAVE_MESSAGES
    payload = backend.json_of(backend.requests[0])
    assert payload["feeCode"] == "QL01"
    assert payload["name"] == "Phí quản lý"
    assert payload["active"] is True
    assert payload["startDate"] == "2024-01-01"
    assert payload["endDate"] is None


def test_update_keeps_active_flag(client, backend):
    backend.on("PUT", "/api/fees/f1", FEE)
    key = FeeEditor(client, "f1").submit(fee_code="QL01", name="Phí quản lý", amount=7000, active=False)
    assert key == "update_success"
    assert backend.json_of(backend.requests[0])["active"] is False


def test_initial_form_from_backend(client, backend):
    backend.on("GET", "/api/fees/f1", FEE)
    form = FeeEditor(client, "f1").initial_form()
    assert form.fee_code == "QL01"
    assert form.start_date == date(2024, 1, 1)
    assert form.active is False


def test_save_error_message(client, backend):
    backend.on("POST", "/api/fees", {"message": "Mã phí đã tồn tại"}, status=400)
    editor = FeeEditor(client)
    with pytest.raises(APIError):
        editor.submit(fee_code="QL01", name="Phí quản lý", amount=1)
    assert editor.error == "Mã phí đã tồn tại"
