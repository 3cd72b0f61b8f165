from datetime import date

import pytest

from bluemoon.api.schemas.residents import GenderDTO, ResidentForm
from bluemoon.domain.exceptions import FormValidationError
from bluemoon.services.resident_service import ResidentListScreen

RESIDENTS = [
    {"_id": "r1", "fullName": "Nguyễn Văn A", "idCard": "001203004005", "phone": "0901234567",
     "gender": "male", "household": {"_id": "h1", "apartmentNumber": "A101"}},
    {"_id": "r2", "fullName": "Trần Thị B", "gender": "female"},
]


@pytest.fixture
def screen(client, backend):
    backend.on("GET", "/api/residents", RESIDENTS)
    return ResidentListScreen(client)


def test_search_matches_any_field(screen):
    screen.load()
    screen.search_term = "0901"
    assert [r.id for r in screen.filtered()] == ["r1"]
    screen.search_term = "a101"
    assert [r.id for r in screen.filtered()] == ["r1"]
    screen.search_term = "trần"
    assert [r.id for r in screen.filtered()] == ["r2"]


def test_non_numeric_id_card_rejected_without_request(screen, backend):
    with pytest.raises(FormValidationError) as exc_info:
        screen.create(full_name="Lê C", gender="male", id_card="12AB")
    assert exc_info.value.errors == {"id_card": "CMND/CCCD chỉ được chứa số"}
    assert backend.requests == []


def test_update_rejects_non_numeric_id_card_without_request(screen, backend):
    with pytest.raises(FormValidationError) as exc_info:
        screen.update("r1", full_name="Nguyễn Văn A", gender="male", id_card="12AB")
    assert exc_info.value.errors == {"id_card": "CMND/CCCD chỉ được chứa số"}
    assert backend.requests == []


def test_required_fields(screen, backend):
    with pytest.raises(FormValidationError) as exc_info:
        screen.create(phone="09x")
    assert set(exc_info.value.errors) == {"full_name", "gender", "phone"}
    assert backend.requests == []


def test_create_posts_then_reloads(screen, backend):
    backend.on("POST", "/api/residents", RESIDENTS[1])
    screen.create(full_name="Lê C", gender="female", date_of_birth=date(1990, 1, 2), household_id="h1")

    post, reload = backend.requests
    payload = backend.json_of(post)
    assert payload["fullName"] == "Lê C"
    assert payload["gender"] == "female"
    assert payload["dateOfBirth"] == "1990-01-02"
    assert payload["household"] == "h1"
    assert payload["nationality"] == "Việt Nam"
    assert reload.method == "GET"


def test_payload_omits_empty_household():
    form = ResidentForm(full_name="Lê C", gender=GenderDTO.MALE)
    assert "household" not in form.to_payload()


def test_active_households_only(screen, backend):
    backend.on("GET", "/api/households", [
        {"_id": "h1", "apartmentNumber": "A101", "active": True},
        {"_id": "h2", "apartmentNumber": "A102", "active": False},
    ])
    assert [h.id for h in screen.active_households()] == ["h1"]


def test_active_households_failure_is_empty(screen, backend):
    backend.on("GET", "/api/households", {}, status=500)
    assert screen.active_households() == []


def test_edit_form_seeded_from_resident(screen):
    screen.load()
    form = ResidentForm.from_resident(screen.items[0])
    assert form.household_id == "h1"
    assert form.id_card == "001203004005"
    assert form.gender is GenderDTO.MALE
