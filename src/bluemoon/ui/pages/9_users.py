import streamlit as st

from bluemoon.api.schemas.users import RoleDTO
from bluemoon.domain.exceptions import BlueMoonError, FormValidationError
from bluemoon.domain.labels import active_badge, role_label
from bluemoon.services.user_service import UserEditor, UserListScreen
from bluemoon.ui.api_client import APIError, error_message, get_client
from bluemoon.ui.state import flash, require_role, show_flashes

st.title("Quản Lý Người Dùng")

user = require_role(RoleDTO.ADMIN.value)
show_flashes()
client = get_client()
screen = UserListScreen(client, user)

_ROLES = [r.value for r in RoleDTO]


@st.dialog("Người dùng")
def edit_user(user_id: str | None = None):
    editor = UserEditor(client, user, user_id)
    current = editor.initial_form()
    if editor.error:
        st.error(editor.error)
    with st.form("user_form"):
        username = st.text_input("Tên đăng nhập *", value=current.username, disabled=editor.is_edit)
        full_name = st.text_input("Họ tên *", value=current.full_name)
        role = st.selectbox(
            "Vai trò *", _ROLES, index=_ROLES.index(current.role) if current.role in _ROLES else 0,
            format_func=role_label,
        )
        email = st.text_input("Email", value=current.email)
        phone = st.text_input("Số điện thoại", value=current.phone)
        active = st.checkbox("Đang hoạt động", value=current.active)
        hint = " (để trống nếu không đổi)" if editor.is_edit else " *"
        password = st.text_input(f"Mật khẩu{hint}", type="password")
        confirm_password = st.text_input("Xác nhận mật khẩu", type="password")
        if st.form_submit_button("Cập nhật" if editor.is_edit else "Tạo mới"):
            try:
                editor.submit(
                    username=username, full_name=full_name, role=role, email=email,
                    phone=phone, active=active, password=password,
                    confirm_password=confirm_password,
                )
                flash("Cập nhật người dùng thành công" if editor.is_edit
                      else "Tạo người dùng thành công")
                st.rerun()
            except FormValidationError as e:
                for msg in e.errors.values():
                    st.error(msg)
            except APIError:
                st.error(editor.error)


@st.dialog("Xác nhận")
def confirm_delete(user_id: str):
    st.write(screen.delete_prompt)
    c1, c2 = st.columns(2)
    if c1.button("Xóa", type="primary"):
        try:
            screen.delete(user_id, confirm=lambda _: True)
            flash("Xóa người dùng thành công")
        except APIError as e:
            flash(error_message(e, screen.delete_error), "error")
        except BlueMoonError as e:
            flash(e.message, "error")
        st.rerun()
    if c2.button("Hủy"):
        st.rerun()


# --- Toolbar ---
c1, c2 = st.columns([5, 1])
screen.search_term = c1.text_input(
    "Tìm kiếm", placeholder="Tìm theo tên đăng nhập, họ tên, email hoặc vai trò",
    label_visibility="collapsed",
)
if c2.button("Thêm Người Dùng"):
    edit_user()

with st.spinner("Đang tải..."):
    screen.load()

if screen.error:
    st.error(screen.error)
    st.stop()

users = screen.filtered()
if not users:
    st.info("Không tìm thấy người dùng nào")

for u in users:
    badge = active_badge(u.active)
    with st.container(border=True):
        c1, c2, c3, c4 = st.columns([3, 3, 2, 3])
        c1.markdown(f"**{u.full_name or u.username}**  \n@{u.username}")
        c2.write(f"{u.email or '—'}  \n{u.phone or '—'}")
        c3.markdown(f"{role_label(u.role)}  \n:{badge.color}[{badge.label}]")
        b1, b2, b3 = c4.columns(3)
        if b1.button("Sửa", key=f"edit_{u.id}"):
            edit_user(u.id)
        if b2.button("Khóa" if u.active else "Mở khóa", key=f"toggle_{u.id}"):
            try:
                screen.toggle_active(u)
                st.rerun()
            except APIError:
                st.error(screen.error)
        if u.id != user.id and b3.button("Xóa", key=f"del_{u.id}"):
            confirm_delete(u.id)
