"""Continuation state of one paginated query."""

from __future__ import annotations

import enum
from collections import deque
from typing import Any, Deque, Dict, Mapping, Optional, Tuple

Marker = Dict[str, Any]


class ContinuationState(enum.Enum):
    PROGRESSED = "progressed"
    REPEATED = "repeated"
    COMPLETED = "completed"


def normalize_marker(marker: Optional[Mapping[str, Any]]) -> Optional[Marker]:
    """An absent or empty continuation object both mean "no more results"."""

    if not marker:
        return None
    return dict(marker)


class ContinuationStore:
    """
    Holds the continuation marker to send with the next request, plus a short
    history of the markers it replaced.

    Only an exact repetition of the immediately previous marker is reported;
    longer cycles (A, B, A) are not detected.
    """

    def __init__(self, history_size: int = 2) -> None:
        if history_size < 1:
            raise ValueError("history_size must be a positive integer")
        self._current: Optional[Marker] = None
        self._history: Deque[Marker] = deque(maxlen=history_size)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(current={self._current!r}, history={list(self._history)!r})"

    @property
    def history(self) -> Tuple[Marker, ...]:
        return tuple(dict(m) for m in self._history)

    def reset(self) -> None:
        self._current = None
        self._history.clear()

    def current(self) -> Optional[Marker]:
        return dict(self._current) if self._current is not None else None

    def advance(self, next_marker: Optional[Mapping[str, Any]]) -> ContinuationState:
        marker = normalize_marker(next_marker)
        previous = self._current
        if previous is not None:
            self._history.append(previous)
        self._current = marker
        if marker is None:
            return ContinuationState.COMPLETED
        if previous is not None and marker == previous:
            return ContinuationState.REPEATED
        return ContinuationState.PROGRESSED
