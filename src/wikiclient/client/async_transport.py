"""asyncio transport for the MediaWiki action API, built on httpx."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from ..config import settings
from ..errors import MaxLagError
from .params import to_wire_params
from .response import check_response, parse_json
from .transport import retry_after_seconds

logger = logging.getLogger(__name__)


class HttpxAsyncTransport:
    """
    :class:`~wikiclient.client.transport.AsyncTransport` over an
    :class:`httpx.AsyncClient`.

    The client may be shared between many engines; requests of one engine are
    still issued strictly one after another. A client passed in is left as
    given: the User-Agent travels with each request and the caller closes it.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ) -> None:
        self.api_url = api_url or settings.api_url
        self.max_retries = max_retries if max_retries is not None else settings.max_retries
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else settings.request_timeout,
                verify=settings.verify_ssl,
                transport=httpx.AsyncHTTPTransport(retries=self.max_retries),
            )
        self.user_agent = user_agent or settings.user_agent
        self.client = client

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.api_url!r})"

    async def send(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        data = to_wire_params(params)
        attempt = 0
        while True:
            response = await self.client.post(self.api_url, data=data, headers={"User-Agent": self.user_agent})
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
                await asyncio.sleep(wait)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxAsyncTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
