"""Blocking HTTP transport for the MediaWiki action API."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Protocol

import requests
from requests.adapters import HTTPAdapter, Retry

from ..config import settings
from ..errors import MaxLagError
from .params import to_wire_params
from .response import check_response, parse_json

logger = logging.getLogger(__name__)

DEFAULT_MAXLAG_WAIT = 5.0


class Transport(Protocol):
    """Issues one API round-trip and returns the parsed JSON envelope."""

    def send(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        ...


class AsyncTransport(Protocol):
    async def send(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        ...


def retry_after_seconds(headers: Mapping[str, str], default: float = DEFAULT_MAXLAG_WAIT) -> float:
    value = headers.get("Retry-After")
    if value is None:
        return default
    try:
        return max(float(value), 0.0)
    except ValueError:
        return default


class RequestsTransport:
    """
    :class:`Transport` backed by a :class:`requests.Session`.

    Connection errors, HTTP 429 and 5xx answers are retried by the mounted
    ``Retry`` policy. ``maxlag`` errors are retried
    here, sleeping as long as the server's ``Retry-After`` header asks.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        sleep=time.sleep,
    ) -> None:
        self.api_url = api_url or settings.api_url
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.max_retries = max_retries if max_retries is not None else settings.max_retries
        self._sleep = sleep

        if session is None:
            session = requests.Session()
            retries = Retry(
                total=self.max_retries,
                backoff_factor=0.5,
                status_forcelist=(429, 500, 502, 503, 504),
                allowed_methods=None,
            )
            session.mount("https://", HTTPAdapter(max_retries=retries))
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.verify = settings.verify_ssl
        session.headers.update({"User-Agent": user_agent or settings.user_agent})
        self.session = session

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.api_url!r})"

    def send(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        data = to_wire_params(params)
        attempt = 0
        while True:
            response = self.session.post(self.api_url, data=data, timeout=self.timeout)
            response.raise_for_status()
            try:
                return check_response(parse_json(response.text))
            except MaxLagError as exc:
                attempt += 1
                if attempt > self.max_retries:
                    raise
                wait = retry_after_seconds(response.headers)
                exc.retry_after = wait
                logger.warning(f"[maxlag] {exc.info}; retry {attempt}/{self.max_retries} in {wait}s")
                self._sleep(wait)

    def close(self) -> None:
        self.session.close()
