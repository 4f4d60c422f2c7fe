"""Common UI helpers shared by the dashboard and notes pages."""

from __future__ import annotations

import html

import streamlit as st

from src.app.transforms import DeltaIndicator


def inject_shared_css() -> None:
    """Inject CSS for bars, stat cards and delta indicators."""
    st.markdown(
        """
        <style>
        .sd-card {
            text-align: center;
            padding: 1rem 0.5rem;
            border-radius: 8px;
            border: 1px solid rgba(0,0,0,0.08);
            height: 100%;
        }
        .sd-card-value {
            font-size: 1.5rem;
            font-weight: 600;
            margin: 0.3rem 0;
        }
        .sd-card-title {
            font-size: 0.85rem;
            color: #6b7280;
        }
        .sd-row {
            display: flex;
            justify-content: space-between;
            align-items: center;
            font-size: 0.9rem;
        }
        .sd-bar-track {
            width: 100%;
            background-color: #e0e0e0;
            border-radius: 5px;
            height: 10px;
            margin-top: 0.25rem;
        }
        .sd-bar-fill {
            background-color: #1f77b4;
            height: 100%;
            border-radius: 5px;
        }
        .sd-caption {
            display: block;
            text-align: right;
            font-size: 0.75rem;
            color: #6b7280;
            margin: 0.25rem 0 0.8rem 0;
        }
        .sd-delta {
            margin-left: 0.5rem;
            font-size: 0.75rem;
            font-weight: 600;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_bar_html(width: str) -> str:
    return (
        f'<div class="sd-bar-track">'
        f'<div class="sd-bar-fill" style="width: {html.escape(width)};"></div>'
        f"</div>"
    )


def render_delta_html(delta: DeltaIndicator | None) -> str:
    """Coloured glyph + magnitude, or an empty string when there is no delta."""
    if delta is None:
        return ""
    return (
        f'<span class="sd-delta sd-delta-{delta.direction}" style="color: {delta.color};">'
        f"{delta.glyph} {delta.magnitude}%</span>"
    )


def render_loading(text: str) -> None:
    st.status(text, state="running")


def render_error(message: str) -> None:
    st.error(f"Error: {message}")
