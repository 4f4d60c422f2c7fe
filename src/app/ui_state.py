"""UI state management for Streamlit app."""

from __future__ import annotations

import logging
from pathlib import Path

import streamlit as st

from src.app.credentials import ReadOnlyCredentials
from src.app.loader import DASHBOARD_STATS, MY_NOTES, ViewLoader
from src.common.paths import ProjectPaths
from src.common.settings import Settings, load_settings

# Version constant (single source of truth)
APP_VERSION = "study_dashboard_v0.1.0"

PAGES = {
    "dashboard": "Dashboard",
    "notes": "My Notes",
}
DEFAULT_PAGE = "dashboard"
RESOURCES = {
    "dashboard": DASHBOARD_STATS,
    "notes": MY_NOTES,
}

logger = logging.getLogger("study_dashboard")


def get_project_paths() -> ProjectPaths:
    root = Path(__file__).resolve().parents[2]
    return ProjectPaths(root)


@st.cache_data
def get_settings() -> Settings:
    """Load configs/app.yaml + env overrides (cached)."""
    return load_settings(get_project_paths())


class SessionErrorReporter:
    """Error sink: session error log, app log and a toast."""

    def report(self, message: str) -> None:
        logger.warning(f"[app] reported error: {message}")
        st.session_state.setdefault("error_log", []).append(message)
        st.toast(message)


def get_view_loader(page: str) -> ViewLoader:
    """Get the ViewLoader for a page, creating it once per session."""
    key = f"_loader_{page}"
    if key not in st.session_state:
        settings = get_settings()
        st.session_state[key] = ViewLoader(
            RESOURCES[page],
            ReadOnlyCredentials(st.session_state),
            SessionErrorReporter(),
            base_url=settings.api_base_url,
            timeout_s=settings.timeout_s,
        )
    return st.session_state[key]


def request_activation(page: str) -> None:
    """Mark a page so its next render starts a fresh load."""
    st.session_state[f"_activate_{page}"] = True


def consume_activation(page: str) -> bool:
    """Return True once per requested activation (and on first visit)."""
    key = f"_activate_{page}"
    pending = st.session_state.get(key, True)
    st.session_state[key] = False
    return pending


def get_current_page() -> str:
    page = st.session_state.get("page", DEFAULT_PAGE)
    return page if page in PAGES else DEFAULT_PAGE


def set_page(page: str) -> None:
    if page not in PAGES:
        raise ValueError(f"Unknown page: '{page}'")
    if st.session_state.get("page") != page:
        st.session_state["page"] = page
        request_activation(page)


def set_selected_note(note_id) -> None:
    st.session_state["selected_note_id"] = note_id


def get_selected_note():
    return st.session_state.get("selected_note_id")


def render_sidebar(current_page: str) -> None:
    """Render page navigation, reload button and the latest reported error."""
    with st.sidebar:
        st.markdown("### Navigation")
        for page_key, page_label in PAGES.items():
            is_selected = page_key == current_page
            if st.button(
                page_label,
                key=f"page_btn_{page_key}",
                type="primary" if is_selected else "secondary",
                use_container_width=True,
            ):
                if not is_selected:
                    set_page(page_key)
                    st.rerun()

        st.markdown("---")

        if st.button("Reload", key="reload_btn", use_container_width=True):
            request_activation(current_page)
            st.rerun()

        error_log = st.session_state.get("error_log") or []
        if error_log:
            st.caption(f"Last error: {error_log[-1]}")

        selected_note = get_selected_note()
        if selected_note is not None:
            st.caption(f"Selected note: {selected_note}")

        st.caption(APP_VERSION)
