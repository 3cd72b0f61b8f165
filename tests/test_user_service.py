import pytest

from bluemoon.domain.exceptions import BlueMoonError, FormValidationError, PermissionDeniedError
from bluemoon.services.auth_service import login
from bluemoon.services.user_service import UserEditor, UserListScreen, require_admin

USERS = {
    "success": True,
    "data": [
        {"_id": "u-admin", "username": "admin", "fullName": "Quản trị", "role": "admin", "active": True},
        {"_id": "u2", "username": "ketoan", "fullName": "Kế Toán", "role": "accountant",
         "email": "kt@bluemoon.vn", "active": True},
    ],
}


def test_non_admin_refused(client, accountant):
    with pytest.raises(PermissionDeniedError):
        UserListScreen(client, accountant)
    with pytest.raises(PermissionDeniedError):
        UserEditor(client, accountant)
    with pytest.raises(PermissionDeniedError):
        require_admin(None)


def test_list_and_search(client, backend, admin):
    backend.on("GET", "/api/users", USERS)
    screen = UserListScreen(client, admin)
    screen.load()
    screen.search_term = "kt@"
    assert [u.id for u in screen.filtered()] == ["u2"]


def test_cannot_delete_self(client, backend, admin):
    screen = UserListScreen(client, admin)
    asked = []
    with pytest.raises(BlueMoonError):
        screen.delete("u-admin", confirm=lambda m: asked.append(m) or True)
    assert asked == []
    assert backend.requests == []


def test_delete_other_user(client, backend, admin):
    backend.on("GET", "/api/users", USERS)
    backend.on("DELETE", "/api/users/u2", {"success": True, "message": "ok"})
    assert UserListScreen(client, admin).delete("u2", confirm=lambda _: True)
    assert [r.method for r in backend.requests] == ["DELETE", "GET"]


def test_toggle_active(client, backend, admin):
    backend.on("GET", "/api/users", USERS)
    backend.on("PUT", "/api/users/u2", {"success": True, "data": None})
    screen = UserListScreen(client, admin)
    screen.load()
    screen.toggle_active(screen.items[1])
    put = backend.calls("PUT")[0]
    assert backend.json_of(put) == {"active": False}


def test_create_requires_password(client, backend, admin):
    with pytest.raises(FormValidationError) as exc_info:
        UserEditor(client, admin).submit(username="moi", full_name="Người Mới", role="manager")
    assert exc_info.value.errors == {"password": "Mật khẩu là bắt buộc"}
    assert backend.requests == []


def test_password_rules(client, admin):
    editor = UserEditor(client, admin)
    with pytest.raises(FormValidationError) as exc_info:
        editor.submit(username="moi", full_name="A", role="manager", password="123", confirm_password="123")
    assert exc_info.value.errors == {"password": "Mật khẩu phải có ít nhất 6 ký tự"}

    with pytest.raises(FormValidationError) as exc_info:
        editor.submit(username="moi", full_name="A", role="manager", password="123456", confirm_password="654321")
    assert exc_info.value.errors == {"confirm_password": "Mật khẩu xác nhận không khớp"}


def test_edit_without_password_omits_it(client, backend, admin):
    backend.on("PUT", "/api/users/u2", {"success": True})
    UserEditor(client, admin, "u2").submit(username="ketoan", full_name="Kế Toán", role="accountant")
    payload = backend.json_of(backend.requests[0])
    assert "password" not in payload
    assert payload["fullName"] == "Kế Toán"


def test_create_sends_password(client, backend, admin):
    backend.on("POST", "/api/users", {"success": True})
    UserEditor(client, admin).submit(
        username="moi", full_name="A", role="manager", password="secret1", confirm_password="secret1",
    )
    assert backend.json_of(backend.requests[0])["password"] == "secret1"


def test_login_requires_both_fields(anonymous_client, backend):
    with pytest.raises(FormValidationError) as exc_info:
        login(anonymous_client, "  ", "")
    assert set(exc_info.value.errors) == {"username", "password"}
    assert backend.requests == []
