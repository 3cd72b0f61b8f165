import streamlit as st

from bluemoon.api.schemas.fees import FEE_TYPES
from bluemoon.domain.exceptions import FormValidationError
from bluemoon.domain.formatting import format_currency, format_date
from bluemoon.domain.labels import active_badge, fee_type_label
from bluemoon.services.fee_service import SAVE_MESSAGES, FeeEditor, FeeListScreen
from bluemoon.ui.api_client import APIError, error_message, get_client
from bluemoon.ui.state import flash, require_session, show_flashes

st.title("Quản Lý Phí")

require_session()
show_flashes()
client = get_client()
screen = FeeListScreen(client)


@st.dialog("Khoản phí", width="large")
def edit_fee(fee_id: str | None = None):
    editor = FeeEditor(client, fee_id)
    current = editor.initial_form()
    if editor.error:
        st.error(editor.error)
    with st.form("fee_form"):
        c1, c2 = st.columns(2)
        fee_code = c1.text_input("Mã phí *", value=current.fee_code)
        name = c2.text_input("Tên phí *", value=current.name)
        amount = c1.number_input("Số tiền (VND) *", min_value=0.0, step=1000.0, value=current.amount)
        fee_type = c2.selectbox(
            "Loại phí", FEE_TYPES, index=FEE_TYPES.index(current.fee_type) if current.fee_type in FEE_TYPES else 0,
            format_func=fee_type_label,
        )
        start_date = c1.date_input("Ngày bắt đầu", value=current.start_date)
        end_date = c2.date_input("Ngày kết thúc", value=current.end_date)
        description = st.text_area("Mô tả", value=current.description)
        active = st.checkbox("Đang hoạt động", value=current.active) if editor.is_edit else True
        if st.form_submit_button("Cập nhật" if editor.is_edit else "Tạo mới"):
            try:
                key = editor.submit(
                    fee_code=fee_code, name=name, amount=amount, fee_type=fee_type,
                    description=description, start_date=start_date, end_date=end_date,
                    active=active,
                )
                title, detail = SAVE_MESSAGES[key]
                flash(f"{title}. {detail}")
                st.rerun()
            except FormValidationError as e:
                for msg in e.errors.values():
                    st.error(msg)
            except APIError:
                st.error(editor.error)


@st.dialog("Xác nhận")
def confirm_delete(fee_id: str):
    st.write(screen.delete_prompt)
    c1, c2 = st.columns(2)
    if c1.button("Xóa", type="primary"):
        try:
            screen.delete(fee_id, confirm=lambda _: True)
            flash("Xóa khoản phí thành công")
        except APIError as e:
            flash(error_message(e, screen.delete_error), "error")
        st.rerun()
    if c2.button("Hủy"):
        st.rerun()


# --- Toolbar ---
c1, c2 = st.columns([5, 1])
screen.search_term = c1.text_input(
    "Tìm kiếm", placeholder="Tìm theo mã phí hoặc tên phí", label_visibility="collapsed",
)
if c2.button("Thêm Phí Mới"):
    edit_fee()

with st.spinner("Đang tải..."):
    screen.load()

if screen.error:
    st.error(screen.error)
    st.stop()

fees = screen.filtered()
if not fees:
    st.info("Không tìm thấy khoản phí nào")

for f in fees:
    badge = active_badge(f.active)
    with st.container(border=True):
        c1, c2, c3, c4 = st.columns([3, 2, 3, 2])
        c1.markdown(f"**{f.name}**  \nMã: {f.fee_code}")
        c2.markdown(f"{format_currency(f.amount)}  \n{fee_type_label(f.fee_type)}")
        period = " - ".join(d for d in (format_date(f.start_date), format_date(f.end_date)) if d)
        c3.markdown(f":{badge.color}[{badge.label}]  \n{period}")
        b1, b2 = c4.columns(2)
        if b1.button("Sửa", key=f"edit_{f.id}"):
            edit_fee(f.id)
        if b2.button("Xóa", key=f"del_{f.id}"):
            confirm_delete(f.id)
