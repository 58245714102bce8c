"""
Base classes for MediaWiki ``list``, ``generator`` and ``prop`` queries.

See https://www.mediawiki.org/wiki/API:Lists and
https://www.mediawiki.org/wiki/API:Generator .
"""

from __future__ import annotations

import enum
from typing import Any, AsyncIterator, Dict, Iterator, Mapping, Optional

from ..config import settings
from ..paging import (
    AsyncEnumerationEngine,
    AsyncPageFetcher,
    CancellationToken,
    CompatibilityOptions,
    EnumerationEngine,
    PageFetcher,
    PagePropertyExtractor,
    QueryListExtractor,
    QueryPagesExtractor,
    ResponseExtractor,
    create_async_engine,
    create_engine,
)
from .items import PageStub, WikiPage


class PropertyFilterOption(enum.Enum):
    """Tri-state filter: ignore a page property, require it, or exclude it."""

    DISABLE = "disable"
    WITH_PROPERTY = "with"
    WITHOUT_PROPERTY = "without"

    def to_param(self, with_value: str, without_value: str, disabled_value: Optional[str] = None) -> Optional[str]:
        if self is PropertyFilterOption.WITH_PROPERTY:
            return with_value
        if self is PropertyFilterOption.WITHOUT_PROPERTY:
            return without_value
        return disabled_value


def join_values(values) -> Optional[str]:
    if values is None:
        return None
    return "|".join(str(v) for v in values)


class QueryList:
    """Shared configuration of every paginated ``action=query`` sequence."""

    #: Prefix of the module's parameters, e.g. ``ap`` for ``list=allpages``.
    param_prefix = ""

    def __init__(
        self,
        transport,
        pagination_size: Optional[int] = None,
        compatibility_options: Optional[CompatibilityOptions] = None,
    ) -> None:
        if transport is None:
            raise ValueError("transport is required")
        self.transport = transport
        self.pagination_size = pagination_size if pagination_size is not None else settings.pagination_size
        self.compatibility_options = compatibility_options

    @property
    def pagination_size(self) -> int:
        """
        Maximum count of items asked for per API request.

        Can be set as high as 500 for regular users, or 5000 for users with the
        ``apihighlimits`` right. The sequence issues further requests by itself.
        """
        return self._pagination_size

    @pagination_size.setter
    def pagination_size(self, value: int) -> None:
        if value < 1:
            raise ValueError("pagination_size must be a positive integer")
        self._pagination_size = value

    @property
    def limit_param(self) -> Optional[str]:
        return self.param_prefix + "limit" if self.param_prefix else None

    def _base_query(self) -> Dict[str, Any]:
        return {"action": "query", "maxlag": settings.maxlag}

    def _create_engine(
        self,
        extractor: ResponseExtractor,
        params: Mapping[str, Any],
        deserializer,
        limit_param: Optional[str],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> EnumerationEngine:
        return create_engine(
            PageFetcher(self.transport, extractor, limit_param),
            params,
            deserializer=deserializer,
            pagination_size=self.pagination_size,
            compatibility_options=self.compatibility_options,
            cancellation_token=cancellation_token,
            name=repr(self),
        )

    def _create_async_engine(
        self,
        transport,
        extractor: ResponseExtractor,
        params: Mapping[str, Any],
        deserializer,
        limit_param: Optional[str],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncEnumerationEngine:
        return create_async_engine(
            AsyncPageFetcher(transport or self.transport, extractor, limit_param),
            params,
            deserializer=deserializer,
            pagination_size=self.pagination_size,
            compatibility_options=self.compatibility_options,
            cancellation_token=cancellation_token,
            name=repr(self),
        )


class WikiList(QueryList):
    """
    A configured MediaWiki ``list`` module.

    Subclasses provide :attr:`list_name`, :meth:`list_params` and
    :meth:`item_from_json`. Iterating the list starts a new enumeration each
    time; to take only the first ``n`` items, use ``itertools.islice``.
    """

    list_name: str = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.list_name})"

    def __iter__(self) -> Iterator[Any]:
        return self.enum_items()

    def list_params(self) -> Dict[str, Any]:
        """Parameters of ``action=query&list=<list_name>``, including the ``<prefix>limit`` one."""
        raise NotImplementedError

    def item_from_json(self, json: Mapping[str, Any]) -> Any:
        """Parse one element under ``query.<list_name>``."""
        raise NotImplementedError

    def list_query(self) -> Dict[str, Any]:
        params = self._base_query()
        params["list"] = self.list_name
        params.update(self.list_params())
        return params

    def enum_items(self, cancellation_token: Optional[CancellationToken] = None) -> EnumerationEngine:
        return self._create_engine(
            QueryListExtractor(self.list_name),
            self.list_query(),
            self.item_from_json,
            self.limit_param,
            cancellation_token,
        )

    def aenum_items(self, transport=None, cancellation_token: Optional[CancellationToken] = None) -> AsyncEnumerationEngine:
        """Async counterpart of :meth:`enum_items`; ``transport`` must be an async transport."""
        return self._create_async_engine(
            transport,
            QueryListExtractor(self.list_name),
            self.list_query(),
            self.item_from_json,
            self.limit_param,
            cancellation_token,
        )


_RVPROP = "ids|timestamp|flags|comment|user|contentmodel|sha1|size"


def page_fetching_params(fetch_content: bool = False) -> Dict[str, Any]:
    return {
        "prop": "info|revisions|pageprops",
        "inprop": "protection",
        "rvprop": _RVPROP + "|content|tags" if fetch_content else _RVPROP + "|tags",
        "rvslots": "main" if fetch_content else None,
    }


class WikiPageGenerator(WikiList):
    """
    A ``list`` that can also run as ``generator``, yielding full :class:`WikiPage`
    objects from :meth:`enum_pages`.
    """

    #: Remove pages already yielded. A page edited several times shows up again in
    #: later batches of some generators, with only the changed properties.
    distinct_generated_pages = False

    @property
    def generator_name(self) -> str:
        return self.list_name

    def generator_params(self) -> Dict[str, Any]:
        return {"g" + key: value for key, value in self.list_params().items()}

    def item_from_json(self, json):
        return PageStub.from_json(json)

    def generator_query(self, fetch_content: bool = False) -> Dict[str, Any]:
        params = self._base_query()
        params.update(page_fetching_params(fetch_content))
        params["generator"] = self.generator_name
        params.update(self.generator_params())
        return params

    def enum_pages(self, fetch_content: bool = False,
                   cancellation_token: Optional[CancellationToken] = None) -> Iterator[WikiPage]:
        engine = self._create_engine(
            QueryPagesExtractor(),
            self.generator_query(fetch_content),
            WikiPage.from_json,
            "g" + self.limit_param if self.limit_param else None,
            cancellation_token,
        )
        if not self.distinct_generated_pages:
            return engine
        return _distinct_pages(engine)

    def aenum_pages(self, transport=None, fetch_content: bool = False,
                    cancellation_token: Optional[CancellationToken] = None) -> AsyncIterator[WikiPage]:
        """Async counterpart of :meth:`enum_pages`; ``transport`` must be an async transport."""
        engine = self._create_async_engine(
            transport,
            QueryPagesExtractor(),
            self.generator_query(fetch_content),
            WikiPage.from_json,
            "g" + self.limit_param if self.limit_param else None,
            cancellation_token,
        )
        if not self.distinct_generated_pages:
            return engine
        return _adistinct_pages(engine)


def _distinct_pages(pages: Iterator[WikiPage]) -> Iterator[WikiPage]:
    seen = set()
    for page in pages:
        if page.page_id in seen:
            continue
        seen.add(page.page_id)
        yield page


async def _adistinct_pages(pages: AsyncIterator[WikiPage]) -> AsyncIterator[WikiPage]:
    seen = set()
    async for page in pages:
        if page.page_id in seen:
            continue
        seen.add(page.page_id)
        yield page


class WikiPagePropertyList(QueryList):
    """
    A ``prop`` module enumerated for one page, e.g. ``prop=revisions``.

    Items are deserialized together with their owner page.
    """

    property_name: str = ""

    def __init__(self, transport, page_title: Optional[str] = None, page_id: Optional[int] = None, **kwargs) -> None:
        super().__init__(transport, **kwargs)
        self.page_title = page_title
        self.page_id = page_id

    def __repr__(self) -> str:
        if self.page_title is not None:
            return f"{type(self).__name__}({self.page_title})"
        return f"{type(self).__name__}(#{self.page_id})"

    def __iter__(self) -> Iterator[Any]:
        return self.enum_items()

    def list_params(self) -> Dict[str, Any]:
        raise NotImplementedError

    def item_from_json(self, json: Mapping[str, Any], page: Mapping[str, Any]) -> Any:
        raise NotImplementedError

    def property_query(self) -> Dict[str, Any]:
        if self.page_title is None and self.page_id is None:
            raise ValueError("Either page_title or page_id is required")
        params = self._base_query()
        params["prop"] = self.property_name
        if self.page_title is not None:
            params["titles"] = self.page_title
        else:
            params["pageids"] = self.page_id
        params.update(self.list_params())
        return params

    def _deserialize_pair(self, pair):
        item, page = pair
        return self.item_from_json(item, page)

    def enum_items(self, cancellation_token: Optional[CancellationToken] = None) -> EnumerationEngine:
        return self._create_engine(
            PagePropertyExtractor(self.property_name),
            self.property_query(),
            self._deserialize_pair,
            self.limit_param,
            cancellation_token,
        )

    def aenum_items(self, transport=None, cancellation_token: Optional[CancellationToken] = None) -> AsyncEnumerationEngine:
        return self._create_async_engine(
            transport,
            PagePropertyExtractor(self.property_name),
            self.property_query(),
            self._deserialize_pair,
            self.limit_param,
            cancellation_token,
        )
