import httpx
import pytest

from bluemoon.api.schemas.payments import PaymentSearchQuery
from bluemoon.domain.exceptions import APIError, SessionRequiredError, error_message


def test_bearer_token_sent(client, backend):
    backend.on("GET", "/api/households", [])
    client.list_households()
    (req,) = backend.calls("GET", "/api/households")
    assert req.headers["Authorization"] == "Bearer tok-123"


def test_no_token_no_request(anonymous_client, backend):
    with pytest.raises(SessionRequiredError):
        anonymous_client.list_fees()
    assert backend.requests == []


def test_login_stores_token(anonymous_client, backend):
    backend.on("POST", "/api/users/login", {
        "success": True,
        "data": {"_id": "u1", "username": "admin", "fullName": "A", "role": "admin", "token": "jwt"},
    })
    session = anonymous_client.login("admin", "secret")
    assert session.token == "jwt"
    assert anonymous_client.token == "jwt"
    req = backend.calls("POST")[0]
    assert "Authorization" not in req.headers
    assert backend.json_of(req) == {"username": "admin", "password": "secret"}


def test_error_message_extracted(client, backend):
    backend.on("DELETE", "/api/fees/f1", {"message": "Phí đang được sử dụng"}, status=400)
    with pytest.raises(APIError) as exc_info:
        client.delete_fee("f1")
    assert exc_info.value.status_code == 400
    assert error_message(exc_info.value, "fallback") == "Phí đang được sử dụng"


def test_error_without_message_uses_fallback(client, backend):
    backend.routes[("GET", "/api/fees")] = httpx.Response(500, text="Internal Server Error")
    with pytest.raises(APIError) as exc_info:
        client.list_fees()
    assert error_message(exc_info.value, "Không thể tải danh sách phí") == "Không thể tải danh sách phí"


def test_transport_failure_becomes_api_error(client, backend):
    backend.fail("GET", "/api/residents", httpx.ConnectError("refused"))
    with pytest.raises(APIError) as exc_info:
        client.list_residents()
    assert exc_info.value.status_code is None
    assert error_message(exc_info.value, "offline") == "offline"


def test_user_envelope_unwrapped(client, backend):
    backend.on("GET", "/api/users", {
        "success": True,
        "data": [{"_id": "u1", "username": "a", "fullName": "A", "role": "admin", "active": True}],
    })
    users = client.list_users()
    assert [u.username for u in users] == ["a"]


def test_user_envelope_failure(client, backend):
    backend.on("PUT", "/api/users/u1", {"success": False, "message": "Email đã tồn tại"})
    with pytest.raises(APIError) as exc_info:
        client.update_user("u1", {"email": "x@y.z"})
    assert exc_info.value.detail == "Email đã tồn tại"


def test_search_sends_only_filled_params(client, backend):
    backend.on("GET", "/api/payments/search", [])
    client.search_payments(PaymentSearchQuery(apartment_number="A101", min_amount=100000))
    req = backend.calls("GET", "/api/payments/search")[0]
    assert dict(req.url.params) == {"apartmentNumber": "A101", "minAmount": "100000"}


def test_refund_uses_put(client, backend):
    backend.on("PUT", "/api/payments/p1/refund", {"message": "ok"})
    client.refund_payment("p1")
    assert len(backend.calls("PUT", "/api/payments/p1/refund")) == 1


def test_backend_documents_parsed(client, backend):
    backend.on("GET", "/api/households/h1", {
        "_id": "h1", "apartmentNumber": "A101", "address": "Tầng 1",
        "householdHead": {"_id": "r1", "fullName": "Nguyễn Văn A"},
        "createdAt": "2024-03-05T10:00:00.000Z",
    })
    h = client.get_household("h1")
    assert h.apartment_number == "A101"
    assert h.household_head.full_name == "Nguyễn Văn A"
    assert h.created_at.day == 5


def test_non_json_body_becomes_api_error(client, backend):
    backend.routes[("GET", "/api/fees")] = httpx.Response(200, text="<html>proxy</html>")
    with pytest.raises(APIError) as exc_info:
        client.list_fees()
    assert exc_info.value.status_code == 200
    assert error_message(exc_info.value, "fallback") == "fallback"


def test_list_endpoint_rejects_non_list(client, backend):
    backend.on("GET", "/api/fees", {"message": "ok"})
    with pytest.raises(APIError) as exc_info:
        client.list_fees()
    assert exc_info.value.status_code is None


def test_invalid_document_becomes_api_error(client, backend):
    backend.on("GET", "/api/households/h1", {"apartmentNumber": "A101"})
    with pytest.raises(APIError):
        client.get_household("h1")
