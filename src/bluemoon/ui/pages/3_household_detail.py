import pandas as pd
import streamlit as st

from bluemoon.api.schemas.residents import GENDER_LABELS
from bluemoon.domain.formatting import format_currency, format_date
from bluemoon.domain.labels import active_badge, fee_status_badge, fee_type_label
from bluemoon.services.household_service import DETAIL_LOAD_ERROR, head_name, load_household_detail
from bluemoon.ui.api_client import APIError, error_message, get_client
from bluemoon.ui.state import require_session

require_session()

household_id = st.query_params.get("id") or st.session_state.get("household_id")
if not household_id:
    st.switch_page("pages/2_households.py")

try:
    with st.spinner("Đang tải..."):
        detail = load_household_detail(get_client(), household_id)
except APIError as e:
    st.error(error_message(e, DETAIL_LOAD_ERROR))
    st.stop()

household = detail.household
badge = active_badge(household.active)

if st.button("← Quay lại"):
    st.switch_page("pages/2_households.py")

st.title(f"Căn hộ {household.apartment_number}")

# --- Household info ---
with st.container(border=True):
    c1, c2, c3 = st.columns(3)
    c1.markdown(f"**Địa chỉ**  \n{household.address}")
    c2.markdown(f"**Chủ hộ**  \n{head_name(household)}")
    c3.markdown(f"**Trạng thái**  \n:{badge.color}[{badge.label}]")
    st.caption(f"Ngày tạo: {format_date(household.created_at)}")
    if household.note:
        st.write(household.note)

# --- Residents ---
st.subheader(f"Thành viên ({len(detail.residents)})")
if st.button("Thêm cư dân"):
    st.session_state["resident_household_id"] = household.id
    st.switch_page("pages/4_residents.py")

if not detail.residents:
    st.info("Chưa có cư dân nào")
else:
    st.dataframe(
        pd.DataFrame([
            {
                "Họ tên": r.full_name,
                "Ngày sinh": format_date(r.date_of_birth),
                "Giới tính": GENDER_LABELS.get(r.gender, "") if r.gender else "",
                "CMND/CCCD": r.id_card or "",
                "Số điện thoại": r.phone or "",
                "Trạng thái": active_badge(r.active).label,
            }
            for r in detail.residents
        ]),
        hide_index=True, use_container_width=True,
    )

# --- Fee status ---
st.subheader("Tình trạng thanh toán phí")
if not detail.fee_status:
    st.info("Không có khoản phí nào")

for fee in detail.fee_status:
    status = fee_status_badge(fee.status)
    last_month = fee_status_badge(fee.last_month_status)
    with st.container(border=True):
        c1, c2, c3, c4 = st.columns([3, 2, 3, 2])
        c1.markdown(f"**{fee.fee_name}**  \n{fee_type_label(fee.fee_type)}")
        c2.write(format_currency(fee.amount))
        c3.markdown(
            f":{status.color}[{status.label}]  \n"
            f"Tháng trước: :{last_month.color}[{last_month.label}]"
        )
        if fee.status != "paid" and c4.button("Thanh toán", key=f"pay_{fee.fee_id}"):
            st.session_state["payment_prefill"] = {"household_id": household.id, "fee_id": fee.fee_id}
            st.switch_page("pages/7_payment_create.py")
