"""Session-state helpers for the Streamlit UI.

Holds the auth token and logged-in user; only reads/writes ``st.session_state``.
"""
import streamlit as st
from typing import Optional

from bluemoon.api.schemas.users import SessionUser

LOGIN_PAGE = "app.py"
DASHBOARD_PAGE = "pages/1_dashboard.py"

CLIENT_KEY = "bluemoon_api_client"
PAYMENT_SEARCH_KEY = "payment_search_results"


def init_session() -> None:
    """Initialize session state variables."""
    st.session_state.setdefault("token", None)
    st.session_state.setdefault("user", None)


def get_token() -> Optional[str]:
    return st.session_state.get("token")


def get_user() -> Optional[SessionUser]:
    return st.session_state.get("user")


def set_session(user: SessionUser) -> None:
    st.session_state["token"] = user.token
    st.session_state["user"] = user


def clear_session() -> None:
    st.session_state["token"] = None
    st.session_state["user"] = None
    # Data fetched for the previous user must not outlive the logout.
    st.session_state.pop(PAYMENT_SEARCH_KEY, None)
    client = st.session_state.pop(CLIENT_KEY, None)
    if client is not None:
        client.close()


def require_session() -> SessionUser:
    """Send the visitor to the login page unless a session exists."""
    user = get_user()
    if not get_token() or user is None:
        st.switch_page(LOGIN_PAGE)
    return user


def require_role(role: str) -> SessionUser:
    """Like ``require_session`` but non-matching roles land on the dashboard."""
    user = require_session()
    if user.role != role:
        st.switch_page(DASHBOARD_PAGE)
    return user


def flash(message: str, level: str = "success") -> None:
    """Queue a toast for the next page render."""
    st.session_state.setdefault("flash", []).append((level, message))


def show_flashes() -> None:
    icons = {"success": "✅", "error": "❌", "info": "ℹ️"}
    for level, message in st.session_state.pop("flash", []):
        st.toast(message, icon=icons.get(level))
