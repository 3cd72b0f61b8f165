"""Household use-case service: list, detail, create/update, delete."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from bluemoon.domain.exceptions import APIError, error_message
from bluemoon.logging import logger
from bluemoon.api.schemas.common import validate_form
from bluemoon.api.schemas.households import FeeStatusRead, HouseholdForm, HouseholdRead
from bluemoon.api.schemas.residents import ResidentRead
from bluemoon.services.screen import ListScreen, require_token

if TYPE_CHECKING:
    from bluemoon.ui.api_client import BlueMoonClient

MANAGER_ROLES = frozenset({"admin", "accountant"})
NO_HEAD = "Chưa có thông tin"
DETAIL_LOAD_ERROR = "Không thể tải dữ liệu hộ gia đình"


def can_manage(role: str | None) -> bool:
    """Edit and delete buttons are shown to admins and accountants only."""
    return role in MANAGER_ROLES


def head_name(household: HouseholdRead) -> str:
    if household.household_head and household.household_head.full_name:
        return household.household_head.full_name
    return NO_HEAD


class HouseholdListScreen(ListScreen[HouseholdRead]):
    load_error = "Không thể tải danh sách hộ gia đình"
    delete_prompt = "Bạn có chắc chắn muốn xóa hộ gia đình này không?"
    delete_error = "Không thể xóa hộ gia đình"

    def _fetch(self) -> list[HouseholdRead]:
        return self._client.list_households()

    def _search_fields(self, item: HouseholdRead) -> Iterable[str | None]:
        return (item.apartment_number, item.address)

    def _delete(self, item_id: str) -> None:
        self._client.delete_household(item_id)


@dataclass
class HouseholdDetail:
    household: HouseholdRead
    residents: list[ResidentRead] = field(default_factory=list)
    fee_status: list[FeeStatusRead] = field(default_factory=list)


def load_household_detail(client: "BlueMoonClient", household_id: str) -> HouseholdDetail:
    """Fetch the household, its residents and its fee status side by side.

    All three must succeed; the first failure is raised and nothing partial
    is returned.
    """
    require_token(client)
    with ThreadPoolExecutor(max_workers=3) as pool:
        household_f = pool.submit(client.get_household, household_id)
        residents_f = pool.submit(client.list_household_residents, household_id)
        fee_status_f = pool.submit(client.get_household_fee_status, household_id)
        return HouseholdDetail(
            household=household_f.result(),
            residents=residents_f.result(),
            fee_status=fee_status_f.result().fee_status,
        )


class HouseholdEditor:
    """Create/edit form: editing when a household id is given."""

    def __init__(self, client: "BlueMoonClient", household_id: str | None = None) -> None:
        self._client = client
        self.household_id = household_id
        self.error = ""

    @property
    def is_edit(self) -> bool:
        return bool(self.household_id)

    def initial_form(self) -> HouseholdForm:
        if not self.is_edit:
            return HouseholdForm.model_construct()
        require_token(self._client)
        try:
            data = self._client.get_household(self.household_id)
        except APIError as exc:
            self.error = error_message(exc, "Không thể tải thông tin hộ gia đình")
            return HouseholdForm.model_construct()
        return HouseholdForm.model_construct(
            apartment_number=data.apartment_number,
            address=data.address,
            note=data.note or "",
            active=data.active,
        )

    def submit(self, **values) -> None:
        """Validate locally, then POST or PUT. ``FormValidationError`` means nothing was sent."""
        form = validate_form(HouseholdForm, **values)
        require_token(self._client)
        try:
            if self.is_edit:
                self._client.update_household(self.household_id, form.to_payload())
            else:
                self._client.create_household(form.to_payload())
        except APIError as exc:
            action = "cập nhật" if self.is_edit else "tạo"
            self.error = error_message(exc, f"Không thể {action} hộ gia đình")
            raise
        logger.info("Household %s saved", self.household_id or form.apartment_number)
