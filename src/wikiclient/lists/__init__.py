from .allpages import AllPagesGenerator
from .backlinks import BacklinksGenerator
from .base import PropertyFilterOption, QueryList, WikiList, WikiPageGenerator, WikiPagePropertyList
from .categorymembers import CategoryMembersGenerator
from .items import (
    EntitySearchItem,
    LogEventItem,
    PageStub,
    RecentChangeItem,
    RevisionItem,
    SearchResultItem,
    WikiPage,
)
from .logevents import LogEventsList
from .recentchanges import RecentChangesGenerator
from .revisions import RevisionsGenerator
from .search import SearchableField, SearchGenerator

__all__ = [
    "AllPagesGenerator",
    "BacklinksGenerator",
    "CategoryMembersGenerator",
    "EntitySearchItem",
    "LogEventItem",
    "LogEventsList",
    "PageStub",
    "PropertyFilterOption",
    "QueryList",
    "RecentChangeItem",
    "RecentChangesGenerator",
    "RevisionItem",
    "RevisionsGenerator",
    "SearchGenerator",
    "SearchResultItem",
    "SearchableField",
    "WikiList",
    "WikiPage",
    "WikiPageGenerator",
    "WikiPagePropertyList",
]
