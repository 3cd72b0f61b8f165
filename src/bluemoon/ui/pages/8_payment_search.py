import pandas as pd
import streamlit as st

from bluemoon.api.schemas.payments import PaymentSearchQuery
from bluemoon.domain.formatting import format_currency, format_date
from bluemoon.domain.labels import SEARCH_FEE_TYPE_LABELS, payment_status_badge, search_fee_type_label
from bluemoon.services.payment_service import PaymentSearch
from bluemoon.ui.api_client import get_client
from bluemoon.ui.state import PAYMENT_SEARCH_KEY, require_session

st.title("Tìm Kiếm Thanh Toán")

require_session()
# Only the outcome is kept across reruns; the search always runs on this session's client.
search = PaymentSearch(get_client())
search.results, search.searched = st.session_state.get(PAYMENT_SEARCH_KEY, ([], False))

fee_types = [""] + list(SEARCH_FEE_TYPE_LABELS)

with st.form("payment_search"):
    c1, c2, c3 = st.columns(3)
    apartment_number = c1.text_input("Số căn hộ")
    payer_name = c2.text_input("Người nộp")
    fee_name = c3.text_input("Tên phí")
    fee_type = c1.selectbox(
        "Loại phí", fee_types, format_func=lambda t: search_fee_type_label(t) if t else "Tất cả",
    )
    start_date = c2.date_input("Từ ngày", value=None)
    end_date = c3.date_input("Đến ngày", value=None)
    min_amount = c1.number_input("Số tiền từ", min_value=0.0, step=1000.0, value=None)
    max_amount = c2.number_input("Số tiền đến", min_value=0.0, step=1000.0, value=None)
    b1, b2 = st.columns([1, 6])
    submitted = b1.form_submit_button("Tìm kiếm", type="primary")
    cleared = b2.form_submit_button("Xóa bộ lọc")

if cleared:
    search.clear()
elif submitted:
    query = PaymentSearchQuery(
        apartment_number=apartment_number, payer_name=payer_name, fee_name=fee_name,
        fee_type=fee_type, start_date=start_date, end_date=end_date,
        min_amount=min_amount, max_amount=max_amount,
    )
    with st.spinner("Đang tìm kiếm..."):
        search.search(query)
st.session_state[PAYMENT_SEARCH_KEY] = (search.results, search.searched)

if search.error:
    st.error(search.error)
elif search.searched:
    st.subheader(f"Kết quả ({len(search.results)})")
    if not search.results:
        st.info("Không tìm thấy kết quả phù hợp")
    else:
        st.dataframe(
            pd.DataFrame([
                {
                    "Căn hộ": p.household.apartment_number if p.household else "N/A",
                    "Khoản phí": p.fee.name if p.fee else "N/A",
                    "Loại phí": search_fee_type_label(p.fee.fee_type) if p.fee else "Khác",
                    "Số tiền": format_currency(p.amount),
                    "Ngày thanh toán": format_date(p.payment_date),
                    "Người nộp": p.payer_name or "",
                    "Trạng thái": payment_status_badge(p.status).label,
                }
                for p in search.results
            ]),
            hide_index=True, use_container_width=True,
        )
