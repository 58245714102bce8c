"""Typed items produced by the list implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a MediaWiki ISO 8601 timestamp (``2019-09-28T07:31:07Z``)."""
    if not value or value == "infinity":
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _flag(json: Mapping[str, Any], name: str) -> bool:
    # formatversion=1 marks flags with an empty string, formatversion=2 with booleans
    return name in json and json[name] is not False


@dataclass(frozen=True)
class PageStub:
    page_id: int
    title: str
    namespace: int

    @classmethod
    def from_json(cls, json: Mapping[str, Any]) -> "PageStub":
        return cls(page_id=int(json.get("pageid") or 0), title=json.get("title", ""), namespace=int(json.get("ns", 0)))


def _revision_content(revision: Mapping[str, Any]) -> Optional[str]:
    slot = (revision.get("slots") or {}).get("main") or {}
    return slot.get("content", slot.get("*", revision.get("content", revision.get("*"))))


@dataclass
class WikiPage:
    page_id: int
    title: str
    namespace: int
    exists: bool = True
    content_model: Optional[str] = None
    last_revision_id: Optional[int] = None
    length: Optional[int] = None
    touched: Optional[datetime] = None
    content: Optional[str] = None
    page_props: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def stub(self) -> PageStub:
        return PageStub(self.page_id, self.title, self.namespace)

    @classmethod
    def from_json(cls, json: Mapping[str, Any]) -> "WikiPage":
        revisions = json.get("revisions") or []
        return cls(
            page_id=int(json.get("pageid") or 0),
            title=json.get("title", ""),
            namespace=int(json.get("ns", 0)),
            exists=not (_flag(json, "missing") or _flag(json, "invalid")),
            content_model=json.get("contentmodel"),
            last_revision_id=json.get("lastrevid"),
            length=json.get("length"),
            touched=parse_timestamp(json.get("touched")),
            content=_revision_content(revisions[0]) if revisions else None,
            page_props=dict(json.get("pageprops") or {}),
            raw=dict(json),
        )


@dataclass
class RecentChangeItem:
    rc_id: int
    type: str
    title: str
    namespace: int
    page_id: Optional[int]
    revision_id: Optional[int]
    old_revision_id: Optional[int]
    user_name: Optional[str]
    user_id: Optional[int]
    timestamp: Optional[datetime]
    comment: Optional[str] = None
    old_length: Optional[int] = None
    new_length: Optional[int] = None
    minor: bool = False
    bot: bool = False
    new: bool = False
    anonymous: bool = False
    patrolled: bool = False
    tags: List[str] = field(default_factory=list)
    log_id: Optional[int] = None
    log_type: Optional[str] = None
    log_action: Optional[str] = None
    log_params: Dict[str, Any] = field(default_factory=dict)

    @property
    def delta_length(self) -> Optional[int]:
        if self.old_length is None or self.new_length is None:
            return None
        return self.new_length - self.old_length

    @classmethod
    def from_json(cls, json: Mapping[str, Any]) -> "RecentChangeItem":
        return cls(
            rc_id=int(json.get("rcid") or 0),
            type=json.get("type", ""),
            title=json.get("title", ""),
            namespace=int(json.get("ns", 0)),
            page_id=json.get("pageid"),
            revision_id=json.get("revid"),
            old_revision_id=json.get("old_revid"),
            user_name=json.get("user"),
            user_id=json.get("userid"),
            timestamp=parse_timestamp(json.get("timestamp")),
            comment=json.get("comment"),
            old_length=json.get("oldlen"),
            new_length=json.get("newlen"),
            minor=_flag(json, "minor"),
            bot=_flag(json, "bot"),
            new=_flag(json, "new"),
            anonymous=_flag(json, "anon"),
            patrolled=_flag(json, "patrolled"),
            tags=list(json.get("tags") or []),
            log_id=json.get("logid"),
            log_type=json.get("logtype"),
            log_action=json.get("logaction"),
            log_params=dict(json.get("logparams") or {}),
        )


# Maps the legacy log event parameter names into names as presented in `params` node.
_LEGACY_LOG_PARAM_NAMES = {
    "new_ns": "target_ns",
    "new_title": "target_title",
}


@dataclass
class LogEventItem:
    log_id: int
    type: str
    action: str
    title: Optional[str]
    namespace: Optional[int]
    page_id: Optional[int]
    user_name: Optional[str]
    user_id: Optional[int]
    timestamp: Optional[datetime]
    comment: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, json: Mapping[str, Any]) -> "LogEventItem":
        params = json.get("params")
        if params is None:
            # MW 1.19 puts the parameters under a node named after the log type
            legacy = json.get(json.get("type") or "")
            if isinstance(legacy, Mapping):
                params = {_LEGACY_LOG_PARAM_NAMES.get(k, k): v for k, v in legacy.items()}
        return cls(
            log_id=int(json.get("logid") or 0),
            type=json.get("type", ""),
            action=json.get("action", ""),
            title=json.get("title"),
            namespace=json.get("ns"),
            page_id=json.get("pageid"),
            user_name=json.get("user"),
            user_id=json.get("userid"),
            timestamp=parse_timestamp(json.get("timestamp")),
            comment=json.get("comment"),
            params=dict(params or {}),
            tags=list(json.get("tags") or []),
        )


@dataclass
class SearchResultItem:
    title: str
    namespace: int
    page_id: Optional[int] = None
    size: Optional[int] = None
    word_count: Optional[int] = None
    snippet: Optional[str] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_json(cls, json: Mapping[str, Any]) -> "SearchResultItem":
        return cls(
            title=json.get("title", ""),
            namespace=int(json.get("ns", 0)),
            page_id=json.get("pageid"),
            size=json.get("size"),
            word_count=json.get("wordcount"),
            snippet=json.get("snippet"),
            timestamp=parse_timestamp(json.get("timestamp")),
        )


@dataclass
class RevisionItem:
    revision_id: int
    parent_id: Optional[int]
    page: PageStub
    timestamp: Optional[datetime]
    user_name: Optional[str] = None
    user_id: Optional[int] = None
    comment: Optional[str] = None
    minor: bool = False
    size: Optional[int] = None
    sha1: Optional[str] = None
    content: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, json: Mapping[str, Any], page: Mapping[str, Any]) -> "RevisionItem":
        return cls(
            revision_id=int(json.get("revid") or 0),
            parent_id=json.get("parentid"),
            page=PageStub.from_json(page),
            timestamp=parse_timestamp(json.get("timestamp")),
            user_name=json.get("user"),
            user_id=json.get("userid"),
            comment=json.get("comment"),
            minor=_flag(json, "minor"),
            size=json.get("size"),
            sha1=json.get("sha1"),
            content=_revision_content(json),
            tags=list(json.get("tags") or []),
        )


@dataclass
class EntitySearchItem:
    id: str
    label: Optional[str] = None
    description: Optional[str] = None
    concept_uri: Optional[str] = None
    url: Optional[str] = None
    match: Dict[str, Any] = field(default_factory=dict)
    aliases: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, json: Mapping[str, Any]) -> "EntitySearchItem":
        return cls(
            id=json["id"],
            label=json.get("label"),
            description=json.get("description"),
            concept_uri=json.get("concepturi"),
            url=json.get("url"),
            match=dict(json.get("match") or {}),
            aliases=list(json.get("aliases") or []),
        )
