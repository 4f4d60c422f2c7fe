"""Dashboard page: stat cards, weekly progress and topic mastery."""

from __future__ import annotations

import asyncio
import html

import streamlit as st

from src.app.load_state import LoadState, ViewKind, resolve_view
from src.app.pages.common import (
    inject_shared_css,
    render_bar_html,
    render_delta_html,
    render_error,
    render_loading,
)
from src.app.transforms import build_stat_cards, topic_mastery_rows, weekly_progress_frame
from src.app.ui_state import consume_activation, get_settings, get_view_loader
from src.common.settings import DisplayOptions

PAGE = "dashboard"
LOADING_TEXT = "Loading dashboard..."


def render_stat_cards(stats: dict, options: DisplayOptions) -> None:
    cards = build_stat_cards(stats, options)
    cols = st.columns(len(cards))
    for col, card in zip(cols, cards):
        with col:
            st.markdown(
                f"""<div class="sd-card">
                    <div class="sd-card-value">{html.escape(card.value)}</div>
                    <div class="sd-card-title">{html.escape(card.title)}</div>
                </div>""",
                unsafe_allow_html=True,
            )
            st.caption(card.icon)


def render_weekly_progress(series) -> None:
    st.markdown("#### Weekly Progress")
    df = weekly_progress_frame(series)
    if df.empty:
        st.caption("No weekly progress data available.")
        return

    for _, row in df.iterrows():
        st.markdown(
            f"""<div class="sd-row"><span>{html.escape(str(row["day"]))}</span><span>{row["hours"]}</span></div>
            {render_bar_html(row["width"])}
            <span class="sd-caption">{row["accuracy_label"]}</span>""",
            unsafe_allow_html=True,
        )


def render_topic_mastery(series) -> None:
    st.markdown("#### Topic Mastery")
    rows = topic_mastery_rows(series)
    if not rows:
        st.caption("No topic mastery data available.")
        return

    for row in rows:
        st.markdown(
            f"""<div class="sd-row"><span>{html.escape(row.topic)}</span>
            <span>{row.percentage}{render_delta_html(row.delta)}</span></div>
            {render_bar_html(row.width)}""",
            unsafe_allow_html=True,
        )


def render_view(state: LoadState, user_display_name: str, options: DisplayOptions) -> ViewKind:
    """Render the dashboard for a LoadState and return the view that was shown."""
    kind = resolve_view(state)
    if kind is ViewKind.LOADING:
        render_loading(LOADING_TEXT)
        return kind
    if kind is ViewKind.ERROR:
        render_error(state.message)
        return kind

    stats = state.payload or {}
    st.markdown(f"## Hello, {user_display_name}! Here's your Study Analytics.")
    render_stat_cards(stats, options)
    st.markdown("")

    col_weekly, col_topics = st.columns(2)
    with col_weekly:
        render_weekly_progress(stats.get("weekly_progress"))
    with col_topics:
        render_topic_mastery(stats.get("topic_mastery"))
    return kind


def render() -> None:
    settings = get_settings()
    loader = get_view_loader(PAGE)
    inject_shared_css()

    if consume_activation(PAGE):
        with st.spinner(LOADING_TEXT):
            asyncio.run(loader.activate())

    render_view(loader.state, settings.user_display_name, settings.display)
