"""Helpers for running wikiclient over an (OAuth-authenticated) mwclient site."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import mwclient

from ..config import OAuthConfig, settings
from .params import to_wire_params
from .response import check_response


def build_site(oauth: Optional[OAuthConfig] = None, user_agent: Optional[str] = None) -> mwclient.Site:
    oauth = oauth or settings.oauth
    if not oauth:
        raise RuntimeError("MediaWiki OAuth consumer not configured")

    return mwclient.Site(
        oauth.api_host,
        path=oauth.api_path,
        scheme="https",
        clients_useragent=user_agent or settings.user_agent,
        consumer_token=oauth.consumer_key,
        consumer_secret=oauth.consumer_secret,
        access_token=oauth.access_token,
        access_secret=oauth.access_secret,
    )


class MwclientTransport:
    """
    :class:`~wikiclient.client.transport.Transport` delegating the HTTP work
    (sessions, OAuth signing, lag back-off) to an :class:`mwclient.Site`.

    ``Site.raw_api`` is used rather than ``Site.api`` so that API errors are
    mapped onto :mod:`wikiclient.errors` instead of ``mwclient.errors.APIError``.
    """

    def __init__(self, site: mwclient.Site, http_method: str = "POST") -> None:
        self.site = site
        self.http_method = http_method

    @classmethod
    def from_settings(cls) -> "MwclientTransport":
        return cls(build_site())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.site!r})"

    def send(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        data = to_wire_params(params)
        action = data.pop("action")
        data.pop("format", None)
        result = self.site.raw_api(action, self.http_method, **data)
        return check_response(result or {})
