import streamlit as st

from bluemoon.domain.exceptions import FormValidationError
from bluemoon.domain.formatting import format_date
from bluemoon.domain.labels import active_badge
from bluemoon.services.household_service import (
    HouseholdEditor, HouseholdListScreen, can_manage, head_name,
)
from bluemoon.ui.api_client import APIError, error_message, get_client
from bluemoon.ui.state import flash, require_session, show_flashes

st.title("Hộ Gia Đình")

user = require_session()
show_flashes()
client = get_client()
screen = HouseholdListScreen(client)
manager = can_manage(user.role)


@st.dialog("Hộ gia đình")
def edit_household(household_id: str | None = None):
    editor = HouseholdEditor(client, household_id)
    current = editor.initial_form()
    if editor.error:
        st.error(editor.error)
    with st.form("household_form"):
        apartment_number = st.text_input("Số căn hộ *", value=current.apartment_number)
        address = st.text_input("Địa chỉ *", value=current.address)
        note = st.text_area("Ghi chú", value=current.note)
        active = st.toggle("Hoạt động", value=current.active) if editor.is_edit else True
        if st.form_submit_button("Cập nhật" if editor.is_edit else "Thêm mới"):
            try:
                editor.submit(
                    apartment_number=apartment_number, address=address,
                    note=note, active=active,
                )
                flash("Cập nhật hộ gia đình thành công" if editor.is_edit
                      else "Thêm hộ gia đình thành công")
                st.rerun()
            except FormValidationError as e:
                for msg in e.errors.values():
                    st.error(msg)
            except APIError:
                st.error(editor.error)


@st.dialog("Xác nhận")
def confirm_delete(household_id: str):
    st.write(screen.delete_prompt)
    c1, c2 = st.columns(2)
    if c1.button("Xóa", type="primary"):
        try:
            screen.delete(household_id, confirm=lambda _: True)
            flash("Xóa hộ gia đình thành công")
        except APIError as e:
            flash(error_message(e, screen.delete_error), "error")
        st.rerun()
    if c2.button("Hủy"):
        st.rerun()


# --- Toolbar ---
c1, c2 = st.columns([5, 1])
screen.search_term = c1.text_input(
    "Tìm kiếm", placeholder="Tìm kiếm theo số căn hộ hoặc địa chỉ", label_visibility="collapsed",
)
if c2.button("Thêm Hộ Gia Đình"):
    edit_household()

with st.spinner("Đang tải..."):
    screen.load()

if screen.error:
    st.error(screen.error)
    st.stop()

households = screen.filtered()

if not households:
    st.info("Không tìm thấy hộ gia đình nào")

for h in households:
    badge = active_badge(h.active)
    with st.container(border=True):
        c1, c2, c3 = st.columns([4, 3, 3])
        c1.markdown(f"**Căn hộ {h.apartment_number}**  \n{h.address}")
        c2.markdown(f":{badge.color}[{badge.label}]  \nChủ hộ: {head_name(h)}  \n"
                    f"Ngày tạo: {format_date(h.created_at)}")
        b1, b2, b3 = c3.columns(3)
        if b1.button("Chi tiết", key=f"view_{h.id}"):
            st.session_state["household_id"] = h.id
            st.switch_page("pages/3_household_detail.py")
        if manager:
            if b2.button("Sửa", key=f"edit_{h.id}"):
                edit_household(h.id)
            if b3.button("Xóa", key=f"del_{h.id}"):
                confirm_delete(h.id)
