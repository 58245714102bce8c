"""One request per batch: parameter assembly and response decomposition."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .continuation import Marker, normalize_marker


@dataclass(frozen=True)
class ApiWarning:
    module: str
    text: str


@dataclass
class Batch:
    items: List[Any]
    continuation: Optional[Marker] = None
    warnings: List[ApiWarning] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.continuation is None


def extract_query_continuation(data: Mapping[str, Any]) -> Optional[Marker]:
    """
    ``continue`` object of modern servers, or the legacy ``query-continue``
    object (keyed by module) flattened into a single marker.
    """
    marker = data.get("continue")
    if marker:
        return normalize_marker(marker)
    legacy = data.get("query-continue")
    if not legacy:
        return None
    flat: Marker = {}
    for module_params in legacy.values():
        flat.update(module_params)
    return normalize_marker(flat)


def extract_warnings(data: Mapping[str, Any]) -> List[ApiWarning]:
    warnings = data.get("warnings") or {}
    result = []
    for module, node in warnings.items():
        if isinstance(node, Mapping):
            text = node.get("*", node.get("warnings"))
        else:
            text = node
        if isinstance(text, list):
            text = "\n".join(str(t) for t in text)
        result.append(ApiWarning(module=module, text=str(text)))
    return result


def _query_pages(data: Mapping[str, Any]) -> List[Dict[str, Any]]:
    # If there's no result, "query" node will not exist.
    pages = (data.get("query") or {}).get("pages") or []
    # formatversion=1 keys pages by id
    pages = list(pages.values()) if isinstance(pages, Mapping) else list(pages)
    # Ranked generators (search) send the rank in "index"; the array itself is in page id order
    if any("index" in page for page in pages):
        pages.sort(key=lambda page: (page.get("index") is None, page.get("index") or 0))
    return pages


class ResponseExtractor:
    """Splits a JSON response into items, continuation marker and warnings."""

    def extract_items(self, data: Mapping[str, Any]) -> List[Any]:
        raise NotImplementedError

    def extract_continuation(self, data: Mapping[str, Any]) -> Optional[Marker]:
        return extract_query_continuation(data)

    def extract_warnings(self, data: Mapping[str, Any]) -> List[ApiWarning]:
        return extract_warnings(data)

    def decompose(self, data: Mapping[str, Any]) -> Batch:
        return Batch(
            items=self.extract_items(data),
            continuation=self.extract_continuation(data),
            warnings=self.extract_warnings(data),
        )


class QueryListExtractor(ResponseExtractor):
    """Items of ``action=query&list=<name>`` under ``query.<name>``."""

    def __init__(self, list_name: str) -> None:
        self.list_name = list_name

    def extract_items(self, data):
        return list((data.get("query") or {}).get(self.list_name) or [])


class QueryPagesExtractor(ResponseExtractor):
    """Pages of ``action=query&generator=<name>``."""

    def extract_items(self, data):
        return _query_pages(data)


class PagePropertyExtractor(ResponseExtractor):
    """``(item, owner page)`` pairs of ``action=query&prop=<name>``."""

    def __init__(self, prop_name: str) -> None:
        self.prop_name = prop_name

    def extract_items(self, data):
        items = []
        for page in _query_pages(data):
            # Absent on pages whose values moved to the next batch
            for item in page.get(self.prop_name) or []:
                items.append((item, page))
        return items


class WikibaseSearchExtractor(ResponseExtractor):
    """``action=wbsearchentities`` hits; the offset comes back as ``search-continue``."""

    def extract_items(self, data):
        return list(data.get("search") or [])

    def extract_continuation(self, data):
        offset = data.get("search-continue")
        if offset is None:
            return None
        return {"continue": offset}


class _FetcherBase:
    def __init__(self, transport, extractor: ResponseExtractor, limit_param: Optional[str] = None) -> None:
        self.transport = transport
        self.extractor = extractor
        self.limit_param = limit_param

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.transport!r}, {type(self.extractor).__name__})"

    def build_params(
        self,
        base_params: Mapping[str, Any],
        marker: Optional[Mapping[str, Any]],
        batch_size: int,
    ) -> Dict[str, Any]:
        if batch_size < 1:
            raise ValueError("batch_size must be a positive integer")
        params = dict(base_params)
        if marker:
            params.update(marker)
        if self.limit_param:
            params[self.limit_param] = batch_size
        return params


class PageFetcher(_FetcherBase):
    """
    Turns (base parameters, continuation marker, batch size) into exactly one
    transport call. Stateless; transport errors propagate unchanged.
    """

    def fetch(self, base_params, marker, batch_size) -> Batch:
        data = self.transport.send(self.build_params(base_params, marker, batch_size))
        return self.extractor.decompose(data)


class AsyncPageFetcher(_FetcherBase):
    async def fetch(self, base_params, marker, batch_size) -> Batch:
        data = await self.transport.send(self.build_params(base_params, marker, batch_size))
        return self.extractor.decompose(data)
