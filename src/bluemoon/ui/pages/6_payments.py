import streamlit as st

from bluemoon.api.schemas.payments import PaymentStatusDTO
from bluemoon.domain.formatting import format_currency, format_date
from bluemoon.domain.labels import payment_method_label, payment_status_badge
from bluemoon.services.payment_service import ALL_STATUSES, REFUND_PROMPT, PaymentListScreen
from bluemoon.ui.api_client import APIError, error_message, get_client
from bluemoon.ui.state import flash, require_session, show_flashes

st.title("Quản Lý Thanh Toán")

require_session()
show_flashes()
screen = PaymentListScreen(get_client())

_STATUS_OPTIONS = [ALL_STATUSES] + [s.value for s in PaymentStatusDTO]


def _status_label(status: str) -> str:
    return "Tất cả trạng thái" if status == ALL_STATUSES else payment_status_badge(status).label


@st.dialog("Chi Tiết Thanh Toán", width="large")
def show_payment(payment_id: str):
    try:
        p = screen.get(payment_id)
    except APIError as e:
        st.error(error_message(e, "Không thể tải thông tin thanh toán"))
        return
    badge = payment_status_badge(p.status)
    c1, c2 = st.columns(2)
    c1.markdown(f"**Số biên lai:** {p.receipt_number or 'N/A'}")
    c2.markdown(f"**Trạng thái:** :{badge.color}[{badge.label}]")
    c1.markdown(f"**Căn hộ:** {p.household.apartment_number if p.household else 'N/A'}")
    c2.markdown(f"**Khoản phí:** {p.fee.name if p.fee else 'N/A'}")
    c1.markdown(f"**Số tiền:** {format_currency(p.amount)}")
    c2.markdown(f"**Phương thức:** {payment_method_label(p.method)}")
    c1.markdown(f"**Ngày thanh toán:** {format_date(p.payment_date)}")
    c2.markdown(f"**Hạn thanh toán:** {format_date(p.due_date)}")
    c1.markdown(f"**Người nộp:** {p.payer_name or 'N/A'}")
    c2.markdown(f"**CMND/CCCD:** {p.payer_id or 'N/A'}")
    c1.markdown(f"**Số điện thoại:** {p.payer_phone or 'N/A'}")
    c2.markdown(f"**Người thu:** {(p.collector.full_name or p.collector.name) if p.collector else 'N/A'}")
    if p.note:
        st.markdown(f"**Ghi chú:** {p.note}")


@st.dialog("Xác nhận hoàn tiền")
def confirm_refund(payment_id: str):
    st.write(REFUND_PROMPT)
    c1, c2 = st.columns(2)
    if c1.button("Hoàn tiền", type="primary"):
        try:
            screen.refund(payment_id, confirm=lambda _: True)
            flash("Hoàn tiền thành công")
        except APIError as e:
            flash(error_message(e, "Không thể hoàn tiền"), "error")
        st.rerun()
    if c2.button("Hủy"):
        st.rerun()


# --- Toolbar ---
c1, c2, c3, c4 = st.columns([4, 2, 1, 1])
screen.search_term = c1.text_input(
    "Tìm kiếm", placeholder="Tìm theo căn hộ, phí, số biên lai hoặc người nộp",
    label_visibility="collapsed",
)
screen.status_filter = c2.selectbox(
    "Trạng thái", _STATUS_OPTIONS, format_func=_status_label, label_visibility="collapsed",
)
c3.page_link("pages/8_payment_search.py", label="Tìm nâng cao")
c4.page_link("pages/7_payment_create.py", label="Thêm mới")

with st.spinner("Đang tải..."):
    screen.load()

if screen.error:
    st.error(screen.error)
    st.stop()

payments = screen.filtered()
if not payments:
    st.info("Không tìm thấy thanh toán nào")

for p in payments:
    badge = payment_status_badge(p.status)
    with st.container(border=True):
        c1, c2, c3, c4 = st.columns([3, 3, 2, 2])
        c1.markdown(
            f"**{p.household.apartment_number if p.household else 'N/A'}**  \n"
            f"{p.fee.name if p.fee else 'N/A'}"
        )
        c2.markdown(f"{format_currency(p.amount)}  \n{format_date(p.payment_date)}")
        c3.markdown(f":{badge.color}[{badge.label}]  \n{p.receipt_number or ''}")
        b1, b2 = c4.columns(2)
        if b1.button("Xem", key=f"view_{p.id}"):
            show_payment(p.id)
        if p.status == PaymentStatusDTO.PAID.value and b2.button("Hoàn tiền", key=f"refund_{p.id}"):
            confirm_refund(p.id)
