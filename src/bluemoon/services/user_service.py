"""User administration service (admin only)."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from bluemoon.domain.exceptions import APIError, BlueMoonError, PermissionDeniedError, error_message
from bluemoon.logging import logger
from bluemoon.api.schemas.common import validate_form
from bluemoon.api.schemas.users import RoleDTO, SessionUser, UserForm, UserRead
from bluemoon.services.screen import Confirm, ListScreen, require_token

if TYPE_CHECKING:
    from bluemoon.ui.api_client import BlueMoonClient


def require_admin(user: SessionUser | None) -> None:
    if user is None or user.role != RoleDTO.ADMIN.value:
        raise PermissionDeniedError("Chỉ quản trị viên mới được truy cập trang này")


class UserListScreen(ListScreen[UserRead]):
    load_error = "Không thể tải danh sách người dùng"
    delete_prompt = "Bạn có chắc chắn muốn xóa người dùng này không?"
    delete_error = "Không thể xóa người dùng"

    def __init__(self, client: "BlueMoonClient", current_user: SessionUser | None) -> None:
        require_admin(current_user)
        super().__init__(client)
        self.current_user = current_user

    def _fetch(self) -> list[UserRead]:
        return self._client.list_users()

    def _search_fields(self, item: UserRead) -> Iterable[str | None]:
        return (item.username, item.full_name, item.email, item.phone, item.role)

    def _delete(self, item_id: str) -> None:
        self._client.delete_user(item_id)

    def delete(self, item_id: str, confirm: Confirm) -> bool:
        if item_id == self.current_user.id:
            raise BlueMoonError("Không thể xóa tài khoản của chính mình")
        return super().delete(item_id, confirm)

    def toggle_active(self, user: UserRead) -> None:
        require_token(self._client)
        try:
            self._client.update_user(user.id, {"active": not user.active})
        except APIError as exc:
            self.error = error_message(exc, "Không thể cập nhật trạng thái")
            raise
        logger.info("User %s active=%s", user.id, not user.active)
        self.load()


class UserEditor:
    """Edit an existing user, or create one when no id is given."""

    def __init__(
        self,
        client: "BlueMoonClient",
        current_user: SessionUser | None,
        user_id: str | None = None,
    ) -> None:
        require_admin(current_user)
        self._client = client
        self.user_id = user_id
        self.error = ""

    @property
    def is_edit(self) -> bool:
        return bool(self.user_id)

    def initial_form(self) -> UserForm:
        if not self.is_edit:
            return UserForm.model_construct(password_required=True)
        require_token(self._client)
        try:
            data = self._client.get_user(self.user_id)
        except APIError as exc:
            self.error = error_message(exc, "Không thể tải thông tin người dùng")
            return UserForm.model_construct()
        return UserForm.model_construct(
            username=data.username,
            full_name=data.full_name,
            role=data.role,
            email=data.email or "",
            phone=data.phone or "",
            active=data.active,
        )

    def submit(self, **values) -> None:
        form = validate_form(UserForm, password_required=not self.is_edit, **values)
        require_token(self._client)
        try:
            if self.is_edit:
                self._client.update_user(self.user_id, form.to_payload())
            else:
                self._client.create_user(form.to_payload())
        except APIError as exc:
            action = "cập nhật" if self.is_edit else "tạo"
            self.error = error_message(exc, f"Không thể {action} người dùng")
            raise
        logger.info("User %s saved", form.username)
