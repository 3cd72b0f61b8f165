"""Resident use-case service."""
from __future__ import annotations

from typing import Iterable

from bluemoon.domain.exceptions import APIError
from bluemoon.logging import logger
from bluemoon.api.schemas.common import validate_form
from bluemoon.api.schemas.households import HouseholdRead
from bluemoon.api.schemas.residents import ResidentForm, ResidentRead
from bluemoon.services.screen import ListScreen, require_token


class ResidentListScreen(ListScreen[ResidentRead]):
    load_error = "Không thể tải danh sách cư dân"
    delete_prompt = "Bạn có chắc chắn muốn xóa cư dân này không?"
    delete_error = "Không thể xóa cư dân"

    def _fetch(self) -> list[ResidentRead]:
        return self._client.list_residents()

    def _search_fields(self, item: ResidentRead) -> Iterable[str | None]:
        apartment = item.household.apartment_number if item.household else None
        return (item.full_name, item.id_card, item.phone, apartment)

    def _delete(self, item_id: str) -> None:
        self._client.delete_resident(item_id)

    def active_households(self) -> list[HouseholdRead]:
        """Choices for the household picker; a failure just leaves it empty."""
        require_token(self._client)
        try:
            return [h for h in self._client.list_households() if h.active]
        except APIError as exc:
            logger.error("Lỗi khi tải danh sách hộ gia đình: %s", exc)
            return []

    def get(self, resident_id: str) -> ResidentRead:
        require_token(self._client)
        return self._client.get_resident(resident_id)

    def create(self, **values) -> None:
        """Validate, POST, reload. Invalid input raises before any request."""
        form = validate_form(ResidentForm, **values)
        require_token(self._client)
        self._client.create_resident(form.to_payload())
        logger.info("Resident %s created", form.full_name)
        self.load()

    def update(self, resident_id: str, **values) -> None:
        form = validate_form(ResidentForm, **values)
        require_token(self._client)
        self._client.update_resident(resident_id, form.to_payload())
        logger.info("Resident %s updated", resident_id)
        self.load()
