"""Compatibility options controlling how lists react to misbehaving continuation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from ..config import settings

#: FETCH_MORE doubles the batch size, counting a smaller batch as this one.
FETCH_MORE_FLOOR = 50


class ContinuationLoopBehavior(enum.Enum):
    """
    What to do when the server hands back the continuation parameters it was just given.

    On old MediaWiki builds with raw query continuation this happens when more
    log entries share one (second precision) timestamp than fit into a batch:
    the next batch is asked for with exactly the same parameters, forever.
    """

    #: Raise :class:`~wikiclient.errors.ContinuationLoopError`.
    THROW = "throw"
    #: Log a warning and end the sequence quietly.
    STOP = "stop"
    #: Re-issue the stuck request once with a larger batch size, hoping the last
    #: item of the larger batch moves the continuation forward. Raises if the
    #: server is still stuck afterwards.
    FETCH_MORE = "fetch_more"


@dataclass(frozen=True)
class CompatibilityOptions:
    continuation_loop_behavior: ContinuationLoopBehavior = ContinuationLoopBehavior.THROW
    fetch_more_limit: int = field(default_factory=lambda: settings.fetch_more_limit)
    history_size: int = 2

    def __post_init__(self) -> None:
        if not isinstance(self.continuation_loop_behavior, ContinuationLoopBehavior):
            object.__setattr__(
                self, "continuation_loop_behavior", ContinuationLoopBehavior(self.continuation_loop_behavior)
            )
        if self.fetch_more_limit < 1:
            raise ValueError("fetch_more_limit must be a positive integer")
        if self.history_size < 1:
            raise ValueError("history_size must be a positive integer")

    def fetch_more_size(self, pagination_size: int) -> int:
        """Batch size of the single escalation request issued under FETCH_MORE."""

        widened = min(self.fetch_more_limit, max(pagination_size, FETCH_MORE_FLOOR) * 2)
        return max(pagination_size, widened)


DEFAULT_COMPATIBILITY_OPTIONS = CompatibilityOptions()
