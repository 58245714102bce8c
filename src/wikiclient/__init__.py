"""Lazy, continuation-aware enumeration of MediaWiki API lists."""

from .client import HttpxAsyncTransport, MwclientTransport, RequestsTransport
from .errors import (
    ContinuationLoopError,
    EnumerationCancelled,
    InvalidResponseError,
    OperationFailedError,
    UnexpectedDataError,
    WikiClientError,
)
from .lists import (
    AllPagesGenerator,
    BacklinksGenerator,
    CategoryMembersGenerator,
    LogEventsList,
    PropertyFilterOption,
    RecentChangesGenerator,
    RevisionsGenerator,
    SearchGenerator,
    WikiPage,
)
from .paging import (
    CancellationToken,
    CompatibilityOptions,
    ContinuationLoopBehavior,
    EnumerationEngine,
    AsyncEnumerationEngine,
    create_async_engine,
    create_engine,
)
from .wikibase import EntitySearchList, fetch_entities

__version__ = "0.1.0"

__all__ = [
    "AllPagesGenerator",
    "AsyncEnumerationEngine",
    "BacklinksGenerator",
    "CancellationToken",
    "CategoryMembersGenerator",
    "CompatibilityOptions",
    "ContinuationLoopBehavior",
    "ContinuationLoopError",
    "EntitySearchList",
    "EnumerationCancelled",
    "EnumerationEngine",
    "HttpxAsyncTransport",
    "InvalidResponseError",
    "LogEventsList",
    "MwclientTransport",
    "OperationFailedError",
    "PropertyFilterOption",
    "RecentChangesGenerator",
    "RequestsTransport",
    "RevisionsGenerator",
    "SearchGenerator",
    "UnexpectedDataError",
    "WikiClientError",
    "WikiPage",
    "create_async_engine",
    "create_engine",
    "fetch_entities",
]
