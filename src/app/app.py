"""Main Streamlit app entry point (imported by app.py)."""

from __future__ import annotations

import sys
import traceback
from pathlib import Path

import streamlit as st

from src.app.credentials import seed_credential_from_env
from src.app.ui_state import DEFAULT_PAGE, PAGES, get_current_page, render_sidebar
from src.common.logging import setup_logging


def main() -> None:
    """Run the Streamlit app."""
    # Ensure repo root is on sys.path so "import src.*" works under Streamlit.
    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    # set_page_config must be the first Streamlit command
    st.set_page_config(
        page_title="Study Analytics",
        page_icon=":material/school:",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    logger = setup_logging("INFO")
    if seed_credential_from_env(st.session_state):
        logger.info("[app] credential seeded from STUDY_ID_TOKEN")

    if "page" not in st.session_state:
        st.session_state["page"] = DEFAULT_PAGE

    page = st.session_state.get("page", DEFAULT_PAGE)
    if page not in PAGES:
        st.error(f"Unknown page: '{page}'")
        st.write(f"Expected pages: {', '.join(PAGES)}")
        st.warning(f"Resetting to '{DEFAULT_PAGE}'. Refresh to apply.")
        st.session_state["page"] = DEFAULT_PAGE
        st.stop()

    current_page = get_current_page()
    render_sidebar(current_page)

    try:
        if current_page == "dashboard":
            from src.app.pages.dashboard import render as render_dashboard
            render_dashboard()
        elif current_page == "notes":
            from src.app.pages.notes import render as render_notes
            render_notes()
    except Exception as e:
        st.error("Error loading page")
        st.exception(e)

        logger.error(f"[app] failed to render page '{current_page}'\n{traceback.format_exc()}")

        with st.expander("Debug Information", expanded=False):
            st.write("**Exception Type:**", type(e).__name__)
            st.write("**Exception Message:**", str(e))
            st.write("**Current Page:**", current_page)
            st.write("**Session State Keys:**", list(st.session_state.keys()))

        st.stop()


if __name__ == "__main__":
    main()
