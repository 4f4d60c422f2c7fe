"""Metric transforms: Ready payloads -> display-ready values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import pandas as pd

from src.common.settings import DisplayOptions

NA = "N/A"
UP_GLYPH = "▲"
DOWN_GLYPH = "▼"
POSITIVE_COLOR = "#10b981"  # green
NEGATIVE_COLOR = "#ef4444"  # red


def fmt_number(val) -> str:
    """Format a number the way the API sends it (4.0 -> "4", 2.5 -> "2.5")."""
    if val is None or (isinstance(val, float) and pd.isna(val)):
        return NA
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)


@dataclass(frozen=True)
class StatCard:
    title: str
    value: str
    icon: str


def _truthy_stat(val, suffix: str, zero_as_na: bool) -> str:
    if val is None or (isinstance(val, float) and pd.isna(val)):
        return NA
    present = bool(val) if zero_as_na else val is not None
    return f"{fmt_number(val)}{suffix}" if present else NA


def _defined_stat(val) -> str:
    return fmt_number(val) if val is not None else NA


def build_stat_cards(stats: dict | None, options: DisplayOptions = DisplayOptions()) -> list[StatCard]:
    """
    Build the five summary cards.

    Study time and accuracy fall back to N/A on any falsy value (including 0)
    unless the matching DisplayOptions flag is off. Counters fall back only
    when the field is absent, so a zero streak shows "0".
    """
    stats = stats or {}
    return [
        StatCard(
            "Study Time",
            _truthy_stat(stats.get("study_time_hours"), "h", options.zero_hours_as_na),
            ":material/schedule:",
        ),
        StatCard(
            "Avg Score",
            _truthy_stat(stats.get("average_accuracy"), "%", options.zero_accuracy_as_na),
            ":material/trending_up:",
        ),
        StatCard("Day Streak", _defined_stat(stats.get("days_streak")), ":material/event_available:"),
        StatCard("Notes Added", _defined_stat(stats.get("notes_uploaded")), ":material/note_add:"),
        StatCard("Quizzes Done", _defined_stat(stats.get("quizzes_solved")), ":material/quiz:"),
    ]


def weekly_progress_frame(series: Iterable[dict] | None) -> pd.DataFrame:
    """
    Normalize weekly study time against the busiest day of the series.

    Returns one row per entry with display columns:
    day, hours, accuracy, width_pct (float) and width ("NN%").
    A series whose maximum is 0 gets 0% for every bar.
    """
    df = pd.DataFrame(list(series or []), columns=["day", "time_h", "accuracy"])
    if df.empty:
        return df.assign(hours=[], accuracy_label=[], width_pct=[], width=[])

    time_h = pd.to_numeric(df["time_h"], errors="coerce")
    peak = time_h.max()
    if pd.isna(peak) or peak <= 0:
        width_pct = pd.Series(0.0, index=df.index)
    else:
        width_pct = (time_h / peak * 100).fillna(0.0)

    df["hours"] = df["time_h"].map(lambda v: f"{fmt_number(v)}h")
    df["accuracy_label"] = df["accuracy"].map(lambda v: f"Accuracy: {fmt_number(v)}%")
    df["width_pct"] = width_pct.astype(float)
    df["width"] = df["width_pct"].map(lambda v: f"{fmt_number(float(v))}%")
    return df


@dataclass(frozen=True)
class DeltaIndicator:
    direction: str
    glyph: str
    color: str
    magnitude: str


def delta_indicator(change) -> DeltaIndicator | None:
    """Up/down indicator for a signed change; None when the change is absent."""
    if change is None or (isinstance(change, float) and pd.isna(change)):
        return None
    magnitude = fmt_number(abs(change))
    if change >= 0:
        return DeltaIndicator("up", UP_GLYPH, POSITIVE_COLOR, magnitude)
    return DeltaIndicator("down", DOWN_GLYPH, NEGATIVE_COLOR, magnitude)


@dataclass(frozen=True)
class TopicRow:
    topic: str
    percentage: str
    width: str
    delta: DeltaIndicator | None


def topic_mastery_rows(series: Iterable[dict] | None) -> list[TopicRow]:
    # percentage is trusted to be 0..100; no clamping here
    rows = []
    for item in series or []:
        pct = fmt_number(item.get("percentage"))
        rows.append(
            TopicRow(
                topic=str(item.get("topic", "")),
                percentage=f"{pct}%" if pct != NA else NA,
                width=f"{pct}%" if pct != NA else "0%",
                delta=delta_indicator(item.get("change")),
            )
        )
    return rows


@dataclass(frozen=True)
class NoteCard:
    id: Any
    filename: str
    preview_text: str
    topics: str


def topics_label(topics) -> str:
    if not topics:
        return NA
    return ", ".join(str(t) for t in topics)


def build_note_cards(notes: Iterable[dict] | None) -> list[NoteCard]:
    return [
        NoteCard(
            id=note.get("id"),
            filename=str(note.get("filename", "")),
            preview_text=str(note.get("preview_text", "")),
            topics=topics_label(note.get("topics")),
        )
        for note in notes or []
    ]


def filter_notes(notes: Iterable[dict] | None, query: str | None) -> list[dict]:
    """Case-insensitive match of query against filename, preview text and topics."""
    notes = list(notes or [])
    q = (query or "").strip().lower()
    if not q:
        return notes

    def _matches(note: dict) -> bool:
        haystack = [str(note.get("filename", "")), str(note.get("preview_text", ""))]
        haystack.extend(str(t) for t in note.get("topics") or [])
        return any(q in text.lower() for text in haystack)

    return [n for n in notes if _matches(n)]
