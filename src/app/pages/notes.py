"""Notes page: the user's uploaded notes as a searchable card grid."""

from __future__ import annotations

import asyncio
import html

import streamlit as st

from src.app.load_state import LoadState, ViewKind, resolve_view
from src.app.pages.common import inject_shared_css, render_error, render_loading
from src.app.transforms import build_note_cards, filter_notes
from src.app.ui_state import consume_activation, get_view_loader, set_selected_note

PAGE = "notes"
LOADING_TEXT = "Loading notes..."
EMPTY_TEXT = "No notes uploaded yet. Upload your first note!"
NO_MATCH_TEXT = "No notes match your search."
GRID_COLUMNS = 3


def render_view(state: LoadState, on_select=set_selected_note) -> ViewKind:
    """Render the notes view for a LoadState and return the view that was shown."""
    kind = resolve_view(state, allow_empty=True)
    if kind is ViewKind.LOADING:
        render_loading(LOADING_TEXT)
        return kind
    if kind is ViewKind.ERROR:
        render_error(state.message)
        return kind
    if kind is ViewKind.EMPTY:
        st.markdown(f"<h4 style='text-align: center;'>{EMPTY_TEXT}</h4>", unsafe_allow_html=True)
        return kind

    st.markdown("## My Notes")
    query = st.text_input("Search notes", key="notes_search", placeholder="Filename, text or topic")
    cards = build_note_cards(filter_notes(state.payload, query))
    if not cards:
        st.info(NO_MATCH_TEXT)
        return kind

    for start in range(0, len(cards), GRID_COLUMNS):
        cols = st.columns(GRID_COLUMNS)
        for col, card in zip(cols, cards[start:start + GRID_COLUMNS]):
            with col:
                with st.container(border=True):
                    st.markdown(f"**{html.escape(card.filename)}**")
                    st.caption(card.preview_text)
                    st.caption(f"Topics: {card.topics}")
                    if st.button("View Details & Resources", key=f"note_btn_{card.id}"):
                        on_select(card.id)
    return kind


def render() -> None:
    loader = get_view_loader(PAGE)
    inject_shared_css()

    if consume_activation(PAGE):
        with st.spinner(LOADING_TEXT):
            asyncio.run(loader.activate())

    render_view(loader.state)
