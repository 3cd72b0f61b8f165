import streamlit as st

from bluemoon.domain.exceptions import FormValidationError
from bluemoon.domain.labels import role_label
from bluemoon.services.auth_service import LOGIN_ERROR, login
from bluemoon.ui.api_client import APIError, error_message, get_client
from bluemoon.ui.state import (
    DASHBOARD_PAGE, clear_session, get_user, init_session, set_session, show_flashes,
)
from bluemoon.ui.validation import run_all_checks

st.set_page_config(page_title="Blue Moon", page_icon="🌙", layout="wide")
init_session()
show_flashes()

st.title("Blue Moon Apartment")
st.caption("Hệ thống quản lý chung cư")

user = get_user()
if user:
    st.success(f"Xin chào, **{user.full_name or user.username}** ({role_label(user.role)})")
    c1, c2 = st.columns([1, 5])
    c1.page_link(DASHBOARD_PAGE, label="Bảng điều khiển →")
    if c2.button("Đăng xuất"):
        clear_session()
        st.rerun()
    st.stop()

# --- Login ---
with st.form("login"):
    username = st.text_input("Tên đăng nhập")
    password = st.text_input("Mật khẩu", type="password")
    submitted = st.form_submit_button("Đăng nhập")

    if submitted:
        try:
            session = login(get_client(), username, password)
            set_session(session)
            st.switch_page(DASHBOARD_PAGE)
        except FormValidationError as e:
            for msg in e.errors.values():
                st.error(msg)
        except APIError as e:
            st.error(error_message(e, LOGIN_ERROR))

# --- Pre-flight ---
with st.expander("Kiểm tra hệ thống", expanded=False):
    if st.button("Chạy kiểm tra"):
        errors = run_all_checks()
        if errors:
            for err in errors:
                st.error(err)
        else:
            st.success("Backend reachable.")
