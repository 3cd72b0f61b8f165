from datetime import date

import streamlit as st

from bluemoon.domain.exceptions import FormValidationError
from bluemoon.domain.formatting import format_currency
from bluemoon.services.payment_service import PaymentCreator, generate_receipt_number
from bluemoon.ui.api_client import APIError, get_client
from bluemoon.ui.state import flash, require_session

st.title("Thêm Thanh Toán Mới")

require_session()
creator = PaymentCreator(get_client())
with st.spinner("Đang tải..."):
    creator.load_options()

ss = st.session_state
ss.setdefault("pay_receipt_number", generate_receipt_number())
ss.setdefault("pay_date", date.today())
for key in ("pay_household", "pay_fee", "pay_payer_name", "pay_payer_id", "pay_payer_phone", "pay_note"):
    ss.setdefault(key, "")
ss.setdefault("pay_amount", None)


def _on_household_change() -> None:
    for field, value in creator.payer_defaults(ss["pay_household"]).items():
        ss[f"pay_{field}"] = value


def _on_fee_change() -> None:
    amount = creator.amount_for_fee(ss["pay_fee"])
    if amount is not None:
        ss["pay_amount"] = float(amount)


# Arriving from a household's fee card.
prefill = ss.pop("payment_prefill", None)
if prefill:
    ss["pay_household"] = prefill.get("household_id", "")
    ss["pay_fee"] = prefill.get("fee_id", "")
    _on_household_change()
    _on_fee_change()

households = {h.id: f"Căn hộ {h.apartment_number}" for h in creator.households}
fees = {f.id: f"{f.name} - {format_currency(f.amount)}" for f in creator.fees}

if st.button("← Quay lại"):
    st.switch_page("pages/6_payments.py")

c1, c2 = st.columns(2)
c1.selectbox(
    "Hộ gia đình *", [""] + list(households), key="pay_household",
    format_func=lambda i: households.get(i, "Chọn hộ gia đình"), on_change=_on_household_change,
)
c2.selectbox(
    "Loại phí *", [""] + list(fees), key="pay_fee",
    format_func=lambda i: fees.get(i, "Chọn loại phí"), on_change=_on_fee_change,
)
c1.number_input("Số tiền (VND) *", min_value=0.0, step=1000.0, key="pay_amount")
c2.date_input("Ngày thanh toán *", key="pay_date")
c1.text_input("Người nộp", key="pay_payer_name")
c2.text_input("CMND/CCCD người nộp", key="pay_payer_id")
c1.text_input("Số điện thoại", key="pay_payer_phone")
c2.text_input("Số biên lai", key="pay_receipt_number")
st.text_area("Ghi chú", key="pay_note")

if st.button("Tạo thanh toán", type="primary"):
    try:
        creator.submit(
            household_id=ss["pay_household"],
            fee_id=ss["pay_fee"],
            amount=ss["pay_amount"],
            payment_date=ss["pay_date"],
            payer_name=ss["pay_payer_name"],
            payer_id=ss["pay_payer_id"],
            payer_phone=ss["pay_payer_phone"],
            receipt_number=ss["pay_receipt_number"],
            note=ss["pay_note"],
        )
    except FormValidationError as e:
        for msg in e.errors.values():
            st.error(msg)
    except APIError:
        st.error(creator.error)
    else:
        for key in [k for k in ss if k.startswith("pay_")]:
            del ss[key]
        flash("Tạo thanh toán thành công")
        st.switch_page("pages/6_payments.py")
