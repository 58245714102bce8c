from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .base import PropertyFilterOption, WikiPageGenerator, join_values


class BacklinksGenerator(WikiPageGenerator):
    """``list=backlinks``: pages linking to ``target_title``."""

    list_name = "backlinks"
    param_prefix = "bl"

    def __init__(
        self,
        transport,
        target_title: str,
        namespaces: Optional[Iterable[int]] = None,
        redirects_filter: PropertyFilterOption = PropertyFilterOption.DISABLE,
        include_redirected: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(transport, **kwargs)
        if not target_title:
            raise ValueError("target_title is required")
        self.target_title = target_title
        self.namespaces = namespaces
        self.redirects_filter = redirects_filter
        self.include_redirected = include_redirected

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.target_title})"

    def list_params(self) -> Dict[str, Any]:
        return {
            "bltitle": self.target_title,
            "blnamespace": join_values(self.namespaces),
            "blfilterredir": self.redirects_filter.to_param("redirects", "nonredirects"),
            "blredirect": self.include_redirected,
            "bllimit": self.pagination_size,
        }
