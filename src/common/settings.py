"""App settings: configs/app.yaml with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from src.common.paths import ProjectPaths

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_S = 15.0
DEFAULT_DISPLAY_NAME = "Student"


@dataclass(frozen=True)
class DisplayOptions:
    """
    Fallback rules for zero-valued stats.

    Study time and accuracy treat zero as "not measured yet" and show N/A.
    Set either flag to False to show "0h" / "0%" instead.
    """

    zero_hours_as_na: bool = True
    zero_accuracy_as_na: bool = True


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_BASE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    display: DisplayOptions = DisplayOptions()
    user_display_name: str = DEFAULT_DISPLAY_NAME


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return default


def _timeout(value: Any) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT_S
    return max(1.0, min(seconds, 120.0))


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(paths: ProjectPaths, env: dict | None = None) -> Settings:
    """Build Settings from configs/app.yaml, then apply STUDY_* env overrides."""
    env = os.environ if env is None else env
    cfg = _read_yaml(paths.configs / "app.yaml")
    api_cfg = cfg.get("api") or {}
    display_cfg = cfg.get("display") or {}
    user_cfg = cfg.get("user") or {}

    base_url = env.get("STUDY_API_BASE_URL") or api_cfg.get("base_url") or DEFAULT_BASE_URL
    timeout_raw = env.get("STUDY_API_TIMEOUT_S", api_cfg.get("timeout_s", DEFAULT_TIMEOUT_S))

    display = DisplayOptions(
        zero_hours_as_na=_as_bool(
            env.get("STUDY_ZERO_HOURS_AS_NA", display_cfg.get("zero_hours_as_na")), True
        ),
        zero_accuracy_as_na=_as_bool(
            env.get("STUDY_ZERO_ACCURACY_AS_NA", display_cfg.get("zero_accuracy_as_na")), True
        ),
    )
    display_name = (
        env.get("STUDY_USER_DISPLAY_NAME")
        or user_cfg.get("display_name")
        or DEFAULT_DISPLAY_NAME
    )

    return Settings(
        api_base_url=str(base_url).rstrip("/"),
        timeout_s=_timeout(timeout_raw),
        display=display,
        user_display_name=str(display_name),
    )
