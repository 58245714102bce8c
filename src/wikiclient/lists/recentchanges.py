from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from .base import PropertyFilterOption, WikiPageGenerator, join_values
from .items import RecentChangeItem

CHANGE_TYPES = ("edit", "external", "new", "log", "categorize")

_RCPROP = "user|userid|comment|parsedcomment|flags|timestamp|title|ids|sizes|redirect|loginfo|tags|sha1"


class RecentChangesGenerator(WikiPageGenerator):
    """``list=recentchanges``, newest first unless ``time_ascending`` is set."""

    list_name = "recentchanges"
    param_prefix = "rc"

    distinct_generated_pages = True

    def __init__(
        self,
        transport,
        time_ascending: bool = False,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        namespaces: Optional[Iterable[int]] = None,
        user_name: Optional[str] = None,
        excluded_user_name: Optional[str] = None,
        tag: Optional[str] = None,
        change_types: Iterable[str] = CHANGE_TYPES,
        minor_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        bot_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        anonymous_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        redirects_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        patrolled_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        last_revisions_only: bool = False,
        include_patrolled: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(transport, **kwargs)
        self.time_ascending = time_ascending
        self.start_time = start_time
        self.end_time = end_time
        self.namespaces = namespaces
        self.user_name = user_name
        self.excluded_user_name = excluded_user_name
        self.tag = tag
        self.change_types = tuple(change_types)
        self.minor_filter = minor_filter
        self.bot_filter = bot_filter
        self.anonymous_filter = anonymous_filter
        self.redirects_filter = redirects_filter
        self.patrolled_filter = patrolled_filter
        self.last_revisions_only = last_revisions_only
        # rcprop=patrolled needs the patrol right
        self.include_patrolled = include_patrolled

    def _types_param(self) -> str:
        unknown = set(self.change_types) - set(CHANGE_TYPES)
        types = [t for t in CHANGE_TYPES if t in self.change_types]
        if unknown or not types:
            raise ValueError(f"Invalid recent change types: {sorted(self.change_types)}")
        return "|".join(types)

    def _show_param(self) -> Optional[str]:
        show = [
            self.minor_filter.to_param("minor", "!minor"),
            self.bot_filter.to_param("bot", "!bot"),
            self.anonymous_filter.to_param("anon", "!anon"),
            self.redirects_filter.to_param("redirect", "!redirect"),
            self.patrolled_filter.to_param("patrolled", "!patrolled"),
        ]
        show = [s for s in show if s]
        return "|".join(show) if show else None

    def _params(self) -> Dict[str, Any]:
        # rcstart is the newer end when enumerating towards older changes
        return {
            "rcdir": "newer" if self.time_ascending else "older",
            "rcstart": self.start_time,
            "rcend": self.end_time,
            "rcnamespace": join_values(self.namespaces),
            "rcuser": self.user_name,
            "rcexcludeuser": self.excluded_user_name,
            "rctag": self.tag,
            "rctype": self._types_param(),
            "rcshow": self._show_param(),
            "rctoponly": self.last_revisions_only,
            "rclimit": self.pagination_size,
        }

    def list_params(self) -> Dict[str, Any]:
        params = self._params()
        params["rcprop"] = _RCPROP + "|patrolled" if self.include_patrolled else _RCPROP
        return params

    def generator_params(self) -> Dict[str, Any]:
        return {"g" + key: value for key, value in self._params().items()}

    def item_from_json(self, json):
        return RecentChangeItem.from_json(json)
