from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from .base import WikiPagePropertyList
from .items import RevisionItem

_RVPROP = "ids|timestamp|flags|comment|user|userid|size|sha1|tags"


class RevisionsGenerator(WikiPagePropertyList):
    """``prop=revisions`` for a single page, newest revision first by default."""

    property_name = "revisions"
    param_prefix = "rv"

    def __init__(
        self,
        transport,
        page_title: Optional[str] = None,
        page_id: Optional[int] = None,
        time_ascending: bool = False,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        start_revision_id: Optional[int] = None,
        end_revision_id: Optional[int] = None,
        user_name: Optional[str] = None,
        excluded_user_name: Optional[str] = None,
        fetch_content: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(transport, page_title=page_title, page_id=page_id, **kwargs)
        self.time_ascending = time_ascending
        self.start_time = start_time
        self.end_time = end_time
        self.start_revision_id = start_revision_id
        self.end_revision_id = end_revision_id
        self.user_name = user_name
        self.excluded_user_name = excluded_user_name
        self.fetch_content = fetch_content

    def list_params(self) -> Dict[str, Any]:
        return {
            "rvlimit": self.pagination_size,
            "rvdir": "newer" if self.time_ascending else "older",
            "rvstart": self.start_time,
            "rvend": self.end_time,
            "rvstartid": self.start_revision_id,
            "rvendid": self.end_revision_id,
            "rvuser": self.user_name,
            "rvexcludeuser": self.excluded_user_name,
            "rvprop": _RVPROP + "|content" if self.fetch_content else _RVPROP,
            "rvslots": "main" if self.fetch_content else None,
        }

    def item_from_json(self, json, page):
        return RevisionItem.from_json(json, page)
