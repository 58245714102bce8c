from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .base import WikiPageGenerator, join_values

CATEGORY_NAMESPACE_PREFIX = "Category:"

MEMBER_TYPES = ("page", "subcat", "file")


def normalize_category_title(title: str) -> str:
    """Prefix ``Category:`` unless the title already names the category namespace."""
    title = title.strip().replace("_", " ")
    if not title:
        raise ValueError("category title is empty")
    if title.lower().startswith("category:"):
        return CATEGORY_NAMESPACE_PREFIX + title[len(CATEGORY_NAMESPACE_PREFIX):].strip()
    return CATEGORY_NAMESPACE_PREFIX + title


class CategoryMembersGenerator(WikiPageGenerator):
    """``list=categorymembers``: pages, subcategories and files of a category."""

    list_name = "categorymembers"
    param_prefix = "cm"

    def __init__(
        self,
        transport,
        category_title: str,
        namespaces: Optional[Iterable[int]] = None,
        member_types: Iterable[str] = MEMBER_TYPES,
        **kwargs,
    ) -> None:
        super().__init__(transport, **kwargs)
        self.category_title = normalize_category_title(category_title)
        self.namespaces = namespaces
        self.member_types = tuple(member_types)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.category_title})"

    def list_params(self) -> Dict[str, Any]:
        types = [t for t in MEMBER_TYPES if t in self.member_types]
        unknown = set(self.member_types) - set(MEMBER_TYPES)
        if unknown or not types:
            raise ValueError(f"Invalid category member types: {sorted(self.member_types)}")
        return {
            "cmtitle": self.category_title,
            "cmlimit": self.pagination_size,
            "cmnamespace": join_values(self.namespaces),
            "cmtype": "|".join(types),
        }
