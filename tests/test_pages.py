"""Renderer tests: each LoadState selects exactly one view."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.app.load_state import Error, Loading, Ready, ViewKind, resolve_view
from src.app.pages import common, dashboard, notes
from src.app.transforms import NEGATIVE_COLOR
from src.common.settings import DisplayOptions

STATS = {
    "study_time_hours": 0,
    "average_accuracy": 84,
    "days_streak": 0,
    "notes_uploaded": 3,
    "quizzes_solved": 7,
    "weekly_progress": [
        {"day": "Mon", "time_h": 2, "accuracy": 80},
        {"day": "Tue", "time_h": 4, "accuracy": 90},
    ],
    "topic_mastery": [
        {"topic": "Algebra", "percentage": 70, "change": -5},
        {"topic": "Geometry", "percentage": 55, "change": 8},
        {"topic": "Statistics", "percentage": 40},
    ],
}

NOTES = [
    {"id": "n1", "filename": "algebra.pdf", "preview_text": "factoring", "topics": ["Algebra"]},
    {"id": "n2", "filename": "scratch.txt", "preview_text": "misc", "topics": []},
]


@pytest.fixture
def fake_st(monkeypatch):
    fake = MagicMock()
    fake.columns.side_effect = lambda spec: [
        MagicMock() for _ in range(spec if isinstance(spec, int) else len(spec))
    ]
    fake.text_input.return_value = ""
    fake.button.return_value = False
    for module in (common, dashboard, notes):
        monkeypatch.setattr(module, "st", fake)
    return fake


def _rendered(fake) -> str:
    return "\n".join(str(arg) for c in fake.mock_calls for arg in c.args)


def test_resolve_view() -> None:
    assert resolve_view(Loading()) is ViewKind.LOADING
    assert resolve_view(Error("x")) is ViewKind.ERROR
    assert resolve_view(Ready([])) is ViewKind.POPULATED
    assert resolve_view(Ready([]), allow_empty=True) is ViewKind.EMPTY
    assert resolve_view(Ready([1]), allow_empty=True) is ViewKind.POPULATED


def test_dashboard_loading_view(fake_st) -> None:
    kind = dashboard.render_view(Loading(), "Ada", DisplayOptions())
    assert kind is ViewKind.LOADING
    assert "Loading dashboard..." in _rendered(fake_st)
    fake_st.columns.assert_not_called()


def test_dashboard_error_view(fake_st) -> None:
    kind = dashboard.render_view(Error("Failed to load dashboard: token expired"), "Ada", DisplayOptions())
    assert kind is ViewKind.ERROR
    fake_st.error.assert_called_once_with("Error: Failed to load dashboard: token expired")
    assert "Hello" not in _rendered(fake_st)


def test_dashboard_populated_view(fake_st) -> None:
    kind = dashboard.render_view(Ready(STATS), "Ada", DisplayOptions())
    text = _rendered(fake_st)

    assert kind is ViewKind.POPULATED
    assert "Hello, Ada! Here's your Study Analytics." in text
    assert "width: 50%;" in text
    assert "width: 100%;" in text
    assert "Accuracy: 90%" in text
    assert f"color: {NEGATIVE_COLOR};\">▼ 5%" in text
    # Statistics has no change, so only two indicators are drawn
    assert text.count("sd-delta-") == 2


def test_dashboard_empty_series_messages(fake_st) -> None:
    dashboard.render_view(Ready({"days_streak": 1}), "Ada", DisplayOptions())
    text = _rendered(fake_st)
    assert "No weekly progress data available." in text
    assert "No topic mastery data available." in text


def test_notes_empty_view(fake_st) -> None:
    kind = notes.render_view(Ready([]))
    assert kind is ViewKind.EMPTY
    assert notes.EMPTY_TEXT in _rendered(fake_st)
    fake_st.columns.assert_not_called()


def test_notes_populated_view(fake_st) -> None:
    kind = notes.render_view(Ready(NOTES), on_select=MagicMock())
    text = _rendered(fake_st)
    assert kind is ViewKind.POPULATED
    assert "**algebra.pdf**" in text
    assert "Topics: Algebra" in text
    assert "Topics: N/A" in text
    assert notes.EMPTY_TEXT not in text


def test_notes_select_callback(fake_st) -> None:
    fake_st.button.return_value = True
    on_select = MagicMock()
    notes.render_view(Ready(NOTES), on_select=on_select)
    assert [c.args[0] for c in on_select.call_args_list] == ["n1", "n2"]


def test_notes_search_without_hits(fake_st) -> None:
    fake_st.text_input.return_value = "calculus"
    kind = notes.render_view(Ready(NOTES))
    assert kind is ViewKind.POPULATED
    fake_st.info.assert_called_once_with(notes.NO_MATCH_TEXT)


def test_notes_error_view(fake_st) -> None:
    kind = notes.render_view(Error("Failed to load notes: HTTP error! status: 500"))
    assert kind is ViewKind.ERROR
    fake_st.error.assert_called_once_with("Error: Failed to load notes: HTTP error! status: 500")


def test_loading_view_uses_running_status(fake_st) -> None:
    notes.render_view(Loading())
    fake_st.status.assert_called_once_with(notes.LOADING_TEXT, state="running")
    fake_st.spinner.assert_not_called()
