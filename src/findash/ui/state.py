"""Session-state helpers for the Streamlit UI.

No services, no generator — only reads/writes ``st.session_state``.
"""
import streamlit as st

from findash.config import settings
from findash.sync.view_state import ViewState


def init_session() -> None:
    """Initialize session state variables."""
    if "view_state" not in st.session_state:
        st.session_state["view_state"] = ViewState()
    if "api_url" not in st.session_state:
        st.session_state["api_url"] = settings.API_URL


def get_view_state() -> ViewState:
    """Get the dashboard's ViewState for this session."""
    return st.session_state["view_state"]


def reset_view_state() -> ViewState:
    """Drop every rendered table and metric; the next run starts empty."""
    st.session_state["view_state"] = ViewState()
    return st.session_state["view_state"]


def get_api_url() -> str:
    return st.session_state.get("api_url", settings.API_URL)


def set_api_url(url: str) -> None:
    st.session_state["api_url"] = url
