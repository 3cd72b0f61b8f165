"""Login use-case service."""
from __future__ import annotations

from typing import TYPE_CHECKING

from bluemoon.domain.exceptions import FormValidationError
from bluemoon.logging import logger
from bluemoon.api.schemas.users import SessionUser

if TYPE_CHECKING:
    from bluemoon.ui.api_client import BlueMoonClient

LOGIN_ERROR = "Tên đăng nhập hoặc mật khẩu không đúng"


def login(client: "BlueMoonClient", username: str, password: str) -> SessionUser:
    errors: dict[str, str] = {}
    if not username.strip():
        errors["username"] = "Tên đăng nhập là bắt buộc"
    if not password:
        errors["password"] = "Mật khẩu là bắt buộc"
    if errors:
        raise FormValidationError(errors)
    session = client.login(username.strip(), password)
    logger.info("User %s logged in (role=%s)", session.username, session.role)
    return session
