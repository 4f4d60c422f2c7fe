"""LoadState variants and the view each one selects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class Ready:
    payload: Any


LoadState = Union[Loading, Error, Ready]


class ViewKind(Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    POPULATED = "populated"


def resolve_view(state: LoadState, allow_empty: bool = False) -> ViewKind:
    """
    Pick the view for a LoadState.

    Args:
        state: Current LoadState of the view instance
        allow_empty: If True, a Ready state with an empty payload selects EMPTY
    """
    if isinstance(state, Error):
        return ViewKind.ERROR
    if isinstance(state, Ready):
        if allow_empty and not state.payload:
            return ViewKind.EMPTY
        return ViewKind.POPULATED
    return ViewKind.LOADING
