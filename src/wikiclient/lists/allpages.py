from __future__ import annotations

from typing import Any, Dict, Optional

from .base import PropertyFilterOption, WikiPageGenerator


class AllPagesGenerator(WikiPageGenerator):
    """``list=allpages``: all pages of one namespace, in title order."""

    list_name = "allpages"
    param_prefix = "ap"

    def __init__(
        self,
        transport,
        namespace: int = 0,
        start_title: str = "!",
        end_title: Optional[str] = None,
        prefix: Optional[str] = None,
        redirects_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        language_link_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        **kwargs,
    ) -> None:
        super().__init__(transport, **kwargs)
        self.namespace = namespace
        self.start_title = start_title
        self.end_title = end_title
        self.prefix = prefix
        self.redirects_filter = redirects_filter
        self.language_link_filter = language_link_filter
        self.min_length = min_length
        self.max_length = max_length

    def list_params(self) -> Dict[str, Any]:
        return {
            "apfrom": self.start_title,
            "apto": self.end_title,
            "aplimit": self.pagination_size,
            "apnamespace": self.namespace,
            "apprefix": self.prefix,
            "apfilterredir": self.redirects_filter.to_param("redirects", "nonredirects"),
            "apfilterlanglinks": self.language_link_filter.to_param("withlanglinks", "withoutlanglinks"),
            "apminsize": self.min_length,
            "apmaxsize": self.max_length,
        }
