"""Fee use-case service."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from bluemoon.domain.exceptions import APIError, error_message
from bluemoon.logging import logger
from bluemoon.api.schemas.common import validate_form
from bluemoon.api.schemas.fees import FeeForm, FeeRead
from bluemoon.services.screen import ListScreen, require_token

if TYPE_CHECKING:
    from bluemoon.ui.api_client import BlueMoonClient

# Flash messages carried from the edit page back to the list page.
SAVE_MESSAGES = {
    "update_success": ("Cập nhật phí thành công", "Thông tin phí đã được cập nhật"),
    "create_success": ("Tạo phí mới thành công", "Phí mới đã được thêm vào hệ thống"),
}


class FeeListScreen(ListScreen[FeeRead]):
    load_error = "Không thể tải danh sách phí"
    delete_prompt = "Bạn có chắc chắn muốn xóa khoản phí này không?"
    delete_error = "Không thể xóa khoản phí"

    def _fetch(self) -> list[FeeRead]:
        return self._client.list_fees()

    def _search_fields(self, item: FeeRead) -> Iterable[str | None]:
        return (item.fee_code, item.name)

    def _delete(self, item_id: str) -> None:
        self._client.delete_fee(item_id)


class FeeEditor:
    def __init__(self, client: "BlueMoonClient", fee_id: str | None = None) -> None:
        self._client = client
        self.fee_id = fee_id
        self.error = ""

    @property
    def is_edit(self) -> bool:
        return bool(self.fee_id)

    def initial_form(self) -> FeeForm:
        if not self.is_edit:
            return FeeForm.model_construct()
        require_token(self._client)
        try:
            data = self._client.get_fee(self.fee_id)
        except APIError as exc:
            self.error = error_message(exc, "Không thể tải thông tin phí")
            return FeeForm.model_construct()
        return FeeForm.model_construct(
            fee_code=data.fee_code,
            name=data.name,
            amount=data.amount,
            fee_type=data.fee_type or "mandatory",
            description=data.description or "",
            start_date=data.start_date.date() if data.start_date else None,
            end_date=data.end_date.date() if data.end_date else None,
            active=data.active,
        )

    def submit(self, **values) -> str:
        """Validate and save; returns the flash key for the list page."""
        form = validate_form(FeeForm, **values)
        require_token(self._client)
        payload = form.to_payload(is_edit=self.is_edit)
        try:
            if self.is_edit:
                self._client.update_fee(self.fee_id, payload)
            else:
                self._client.create_fee(payload)
        except APIError as exc:
            action = "cập nhật" if self.is_edit else "tạo"
            self.error = error_message(exc, f"Không thể {action} phí")
            logger.error("Fee save failed (%s): %s", exc.status_code, exc.detail)
            raise
        return "update_success" if self.is_edit else "create_success"
