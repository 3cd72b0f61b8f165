import pytest

from bluemoon.services.fee_service import FeeListScreen
from bluemoon.services.household_service import HouseholdListScreen
from bluemoon.services.payment_service import PaymentListScreen
from bluemoon.services.resident_service import ResidentListScreen
from bluemoon.services.screen import ListScreen
from bluemoon.services.user_service import UserListScreen


class _NoFetch(ListScreen[str]):
    def _search_fields(self, item):
        return [item]


@pytest.mark.parametrize("screen_cls", [ListScreen, _NoFetch])
def test_incomplete_screen_cannot_be_instantiated(client, screen_cls):
    with pytest.raises(TypeError):
        screen_cls(client)


@pytest.mark.parametrize("screen_cls", [
    HouseholdListScreen, ResidentListScreen, FeeListScreen, PaymentListScreen,
])
def test_concrete_screens_instantiate(client, screen_cls):
    assert screen_cls(client).items == []


def test_user_screen_instantiates(client, admin):
    assert UserListScreen(client, admin).items == []
