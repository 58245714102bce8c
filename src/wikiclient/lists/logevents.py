from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from .base import WikiList
from .items import LogEventItem


class LogEventsList(WikiList):
    """
    ``list=logevents``.

    Wikis on old MediaWiki versions with many entries sharing one timestamp
    are the known source of continuation loops; see
    :class:`~wikiclient.paging.ContinuationLoopBehavior`.
    """

    list_name = "logevents"
    param_prefix = "le"

    def __init__(
        self,
        transport,
        time_ascending: bool = False,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        namespace: Optional[int] = None,
        user_name: Optional[str] = None,
        title: Optional[str] = None,
        log_type: Optional[str] = None,
        log_action: Optional[str] = None,
        tag: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(transport, **kwargs)
        self.time_ascending = time_ascending
        self.start_time = start_time
        self.end_time = end_time
        self.namespace = namespace
        self.user_name = user_name
        self.title = title
        self.log_type = log_type
        self.log_action = log_action
        self.tag = tag

    @property
    def full_log_action(self) -> Optional[str]:
        """``leaction`` takes ``type/action``."""
        if self.log_action is None:
            return None
        if self.log_type is not None and "/" not in self.log_action:
            return f"{self.log_type}/{self.log_action}"
        return self.log_action

    def list_params(self) -> Dict[str, Any]:
        return {
            "leprop": "user|userid|comment|parsedcomment|timestamp|title|ids|details|type|tags",
            "ledir": "newer" if self.time_ascending else "older",
            "lestart": self.start_time,
            "leend": self.end_time,
            "lenamespace": self.namespace,
            "leuser": self.user_name,
            "letitle": self.title,
            "letag": self.tag,
            # letype and leaction are mutually exclusive
            "letype": self.log_type if self.log_action is None else None,
            "leaction": self.full_log_action,
            "lelimit": self.pagination_size,
        }

    def item_from_json(self, json):
        return LogEventItem.from_json(json)
