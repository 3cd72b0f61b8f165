"""Payment use-case service: list/refund, create, search."""
from __future__ import annotations

import random
from datetime import date
from typing import TYPE_CHECKING, Iterable

from bluemoon.domain.exceptions import APIError, error_message
from bluemoon.logging import logger
from bluemoon.api.schemas.common import validate_form
from bluemoon.api.schemas.fees import FeeRead
from bluemoon.api.schemas.households import HouseholdRead
from bluemoon.api.schemas.payments import PaymentForm, PaymentRead, PaymentSearchQuery
from bluemoon.services.screen import Confirm, ListScreen, require_token

if TYPE_CHECKING:
    from bluemoon.ui.api_client import BlueMoonClient

ALL_STATUSES = "all"
REFUND_PROMPT = (
    "Bạn có chắc chắn muốn hoàn tiền khoản thanh toán này? "
    "Hành động này không thể hoàn tác."
)
SEARCH_ERROR = "Lỗi khi tìm kiếm thanh toán"


class PaymentListScreen(ListScreen[PaymentRead]):
    load_error = "Không thể tải danh sách thanh toán"

    def __init__(self, client: "BlueMoonClient") -> None:
        super().__init__(client)
        self.status_filter = ALL_STATUSES

    def _fetch(self) -> list[PaymentRead]:
        return self._client.list_payments()

    def _search_fields(self, item: PaymentRead) -> Iterable[str | None]:
        return (
            item.household.apartment_number if item.household else None,
            item.fee.name if item.fee else None,
            item.receipt_number,
            item.payer_name,
        )

    def filtered(self) -> list[PaymentRead]:
        # The search box and the status filter apply together.
        return [
            p for p in self.items
            if (not self.search_term or self._include(p))
            and (self.status_filter == ALL_STATUSES or p.status == self.status_filter)
        ]

    def refund(self, payment_id: str, confirm: Confirm) -> bool:
        if not confirm(REFUND_PROMPT):
            return False
        require_token(self._client)
        self.loading = True
        try:
            self._client.refund_payment(payment_id)
        except APIError:
            self.loading = False
            raise
        logger.info("Payment %s refunded", payment_id)
        self.load()
        return True

    def get(self, payment_id: str) -> PaymentRead:
        require_token(self._client)
        return self._client.get_payment(payment_id)


def generate_receipt_number(today: date | None = None, rng: random.Random | None = None) -> str:
    """``PM<yy><mm><dd><4 random digits>``."""
    today = today or date.today()
    rng = rng or random.Random()
    return f"PM{today:%y%m%d}{rng.randrange(10000):04d}"


class PaymentCreator:
    """Backing state of the create-payment form."""

    def __init__(self, client: "BlueMoonClient") -> None:
        self._client = client
        self.households: list[HouseholdRead] = []
        self.fees: list[FeeRead] = []
        self.error = ""

    def load_options(self) -> None:
        """Households and active fees for the pickers; failures leave a list empty."""
        require_token(self._client)
        try:
            self.households = self._client.list_households()
        except APIError as exc:
            logger.error("Lỗi khi tải danh sách hộ gia đình: %s", exc)
        try:
            self.fees = [f for f in self._client.list_fees() if f.active]
        except APIError as exc:
            logger.error("Lỗi khi tải danh sách phí: %s", exc)

    def amount_for_fee(self, fee_id: str) -> float | None:
        for fee in self.fees:
            if fee.id == fee_id:
                return fee.amount
        return None

    def payer_defaults(self, household_id: str) -> dict[str, str]:
        """Payer name/id/phone from the household head, else its first resident."""
        empty = {"payer_name": "", "payer_id": "", "payer_phone": ""}
        if not household_id:
            return empty
        require_token(self._client)
        try:
            residents = self._client.list_household_residents(household_id)
        except APIError as exc:
            logger.error("Lỗi khi tải thông tin chủ hộ: %s", exc)
            return empty
        head = next((r for r in residents if r.is_household_head), None)
        if head is None and residents:
            head = residents[0]
        if head is None:
            return empty
        return {
            "payer_name": head.full_name or "",
            "payer_id": head.id_card or "",
            "payer_phone": head.phone or "",
        }

    def submit(self, **values) -> PaymentRead:
        form = validate_form(PaymentForm, **values)
        require_token(self._client)
        try:
            payment = self._client.create_payment(form.to_payload())
        except APIError as exc:
            self.error = error_message(exc, "Không thể tạo thanh toán")
            raise
        logger.info("Payment %s created", form.receipt_number)
        return payment


class PaymentSearch:
    def __init__(self, client: "BlueMoonClient") -> None:
        self._client = client
        self.results: list[PaymentRead] = []
        self.searched = False
        self.loading = False
        self.error = ""

    def search(self, query: PaymentSearchQuery) -> list[PaymentRead]:
        require_token(self._client)
        self.loading = True
        self.error = ""
        try:
            self.results = self._client.search_payments(query)
            self.searched = True
        except APIError as exc:
            self.error = error_message(exc, SEARCH_ERROR)
            logger.error("Payment search failed: %s", exc)
        finally:
            self.loading = False
        return self.results

    def clear(self) -> None:
        self.results = []
        self.searched = False
        self.error = ""
