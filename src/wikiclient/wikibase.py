"""
Wikibase (Wikidata) entity search and retrieval.

See https://www.wikidata.org/w/api.php?action=help&modules=wbsearchentities
and https://www.wikidata.org/w/api.php?action=help&modules=wbgetentities .
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from .config import settings
from .errors import UnexpectedDataError
from .lists.base import QueryList, join_values
from .lists.items import EntitySearchItem
from .paging import CancellationToken, EnumerationEngine, WikibaseSearchExtractor

logger = logging.getLogger(__name__)

#: wbgetentities accepts at most 50 ids per request for regular users.
MAX_ENTITIES_PER_REQUEST = 50


class EntitySearchList(QueryList):
    """Entities whose label or alias matches ``keyword``."""

    def __init__(
        self,
        transport,
        keyword: str,
        language: str = "en",
        entity_type: str = "item",
        strict_language: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(transport, **kwargs)
        if not keyword:
            raise ValueError("keyword is required")
        self.keyword = keyword
        self.language = language
        self.entity_type = entity_type
        self.strict_language = strict_language

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.keyword!r})"

    def __iter__(self) -> Iterator[EntitySearchItem]:
        return self.enum_items()

    @property
    def limit_param(self) -> str:
        return "limit"

    def search_query(self) -> Dict[str, Any]:
        return {
            "action": "wbsearchentities",
            "maxlag": settings.maxlag,
            "search": self.keyword,
            "language": self.language,
            "type": self.entity_type,
            "strictlanguage": self.strict_language,
        }

    def enum_items(self, cancellation_token: Optional[CancellationToken] = None) -> EnumerationEngine:
        return self._create_engine(
            WikibaseSearchExtractor(),
            self.search_query(),
            EntitySearchItem.from_json,
            self.limit_param,
            cancellation_token,
        )

    def aenum_items(self, transport=None, cancellation_token: Optional[CancellationToken] = None):
        return self._create_async_engine(
            transport,
            WikibaseSearchExtractor(),
            self.search_query(),
            EntitySearchItem.from_json,
            self.limit_param,
            cancellation_token,
        )


def _partition(ids: Sequence[str], size: int) -> Iterator[List[str]]:
    for start in range(0, len(ids), size):
        yield list(ids[start:start + size])


def _is_missing(entity: Dict[str, Any]) -> bool:
    return "missing" in entity and entity["missing"] is not False


def fetch_entities(
    transport,
    ids: Iterable[str],
    batch_size: int = MAX_ENTITIES_PER_REQUEST,
    props: Optional[Iterable[str]] = None,
    languages: Optional[Iterable[str]] = None,
    strict: bool = False,
) -> Iterator[Dict[str, Any]]:
    """
    Yield the entity JSON of every id, in the order of ``ids``.

    Ids are requested ``batch_size`` at a time, lazily. A missing entity is
    yielded as the server's ``{"id": ..., "missing": ...}`` stub, or raises
    :class:`UnexpectedDataError` when ``strict`` is set. Redirected ids yield
    the redirect target.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be a positive integer")
    ids = list(ids)
    props = list(props) if props is not None else None
    languages = list(languages) if languages is not None else None
    for chunk in _partition(ids, batch_size):
        params = {
            "action": "wbgetentities",
            "maxlag": settings.maxlag,
            "ids": join_values(chunk),
            "props": join_values(props),
            "languages": join_values(languages),
        }
        logger.debug(f"[wbgetentities] {len(chunk)} id(s), starting at {chunk[0]}")
        data = transport.send(params)
        entities = dict(data.get("entities") or {})
        for entity in list(entities.values()):
            redirected_from = (entity.get("redirects") or {}).get("from")
            if redirected_from:
                entities.setdefault(redirected_from, entity)
        for entity_id in chunk:
            entity = entities.get(entity_id)
            if entity is None:
                raise UnexpectedDataError(f"wbgetentities returned no entity for {entity_id}.")
            if _is_missing(entity):
                if strict:
                    raise UnexpectedDataError(f"Entity {entity_id} does not exist.")
                logger.warning(f"Entity {entity_id} does not exist.")
            yield entity
