from __future__ import annotations

import enum
from typing import Any, Dict, Iterable, Optional

from .base import WikiPageGenerator, join_values
from .items import SearchResultItem


class SearchableField(enum.Enum):
    DEFAULT = None
    TITLE = "title"
    TEXT = "text"
    NEAR_MATCH = "nearmatch"


class SearchGenerator(WikiPageGenerator):
    """``list=search``: full text search. See https://www.mediawiki.org/wiki/API:Search ."""

    list_name = "search"
    param_prefix = "sr"

    def __init__(
        self,
        transport,
        keyword: str,
        namespaces: Optional[Iterable[int]] = (0,),
        matching_field: SearchableField = SearchableField.DEFAULT,
        includes_interwiki: bool = False,
        backend_name: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(transport, **kwargs)
        if not keyword:
            raise ValueError("keyword is required")
        self.keyword = keyword
        self.namespaces = namespaces
        self.matching_field = SearchableField(matching_field)
        self.includes_interwiki = includes_interwiki
        self.backend_name = backend_name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.keyword!r})"

    def list_params(self) -> Dict[str, Any]:
        return {
            "srsearch": self.keyword,
            # None searches every namespace
            "srnamespace": "*" if self.namespaces is None else join_values(self.namespaces),
            "srwhat": self.matching_field.value,
            "srlimit": self.pagination_size,
            "srinterwiki": self.includes_interwiki,
            "srbackend": self.backend_name,
            "srprop": "size|wordcount|timestamp|snippet",
        }

    def item_from_json(self, json):
        return SearchResultItem.from_json(json)
