"""
Lazy enumeration of paginated MediaWiki query results.

An engine pulls one batch at a time from its page fetcher and hands the
batch's items to the caller one by one. The next request is only issued when
the caller asks for an item after the current batch is exhausted, so taking
the first ``n`` items (``itertools.islice``) or breaking out of a ``for`` loop
never costs more requests than needed.

Engines are single-pass and single-consumer. Pulling from one instance in
several threads or tasks at once is a misuse with undefined results.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, Mapping, Optional, Tuple

from ..errors import ContinuationLoopError, EnumerationCancelled
from .continuation import ContinuationState, ContinuationStore, Marker
from .fetcher import AsyncPageFetcher, Batch, PageFetcher
from .options import DEFAULT_COMPATIBILITY_OPTIONS, CompatibilityOptions, ContinuationLoopBehavior

logger = logging.getLogger(__name__)

Deserializer = Callable[[Any], Any]


class EngineState(enum.Enum):
    START = "start"
    FETCHING = "fetching"
    YIELDING = "yielding"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


_TERMINAL_STATES = (EngineState.DONE, EngineState.CANCELLED, EngineState.FAILED)


class CancellationToken:
    """Thread-safe cancellation flag that may be shared by several engines."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise EnumerationCancelled("Enumeration was cancelled")


_NEED_FETCH = object()


class _EngineCore:
    """State machine shared by the blocking and the asyncio engine."""

    def __init__(
        self,
        fetcher,
        base_params: Mapping[str, Any],
        deserializer: Optional[Deserializer] = None,
        pagination_size: int = 10,
        compatibility_options: Optional[CompatibilityOptions] = None,
        cancellation_token: Optional[CancellationToken] = None,
        name: Optional[str] = None,
    ) -> None:
        if pagination_size < 1:
            raise ValueError("pagination_size must be a positive integer")
        self.fetcher = fetcher
        self.base_params = dict(base_params)
        self.deserializer = deserializer
        self.pagination_size = pagination_size
        self.options = compatibility_options or DEFAULT_COMPATIBILITY_OPTIONS
        self.cancellation_token = cancellation_token or CancellationToken()
        self.name = name or self.base_params.get("list") or self.base_params.get("action") or "query"

        self.state = EngineState.START
        self.fetch_count = 0
        self._store = ContinuationStore(self.options.history_size)
        self._buffer: Deque[Any] = deque()
        # (marker, batch size) of the next request; None once the server is done
        self._next_request: Optional[Tuple[Optional[Marker], int]] = None
        self._pending_error: Optional[BaseException] = None
        self._escalated = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} state={self.state.value} fetches={self.fetch_count}>"

    @property
    def finished(self) -> bool:
        return self.state in _TERMINAL_STATES

    def cancel(self) -> None:
        """Stop the enumeration; the next pull raises :class:`EnumerationCancelled`."""

        self.cancellation_token.cancel()

    def _finish(self, state: EngineState) -> None:
        self.state = state
        self._buffer.clear()
        self._next_request = None
        self._store.reset()

    def _check_cancelled(self) -> None:
        if self.state is EngineState.CANCELLED or self.cancellation_token.cancelled:
            if self.state is not EngineState.CANCELLED:
                logger.debug(f"[{self.name}] enumeration cancelled after {self.fetch_count} request(s)")
                self._finish(EngineState.CANCELLED)
            raise EnumerationCancelled(f"Enumeration of {self.name} was cancelled")

    def _step(self) -> Any:
        """
        Return the next raw item, or ``_NEED_FETCH`` when a request has to be
        made first. Raises ``StopIteration`` at the end of the sequence.
        """
        if self.state in (EngineState.DONE, EngineState.FAILED):
            raise StopIteration
        self._check_cancelled()
        if self.state is EngineState.START:
            self._store.reset()
            self._next_request = (None, self.pagination_size)
        if self._buffer:
            self.state = EngineState.YIELDING
            return self._buffer.popleft()
        if self._pending_error is not None:
            error, self._pending_error = self._pending_error, None
            self._finish(EngineState.FAILED)
            raise error
        if self._next_request is None:
            self._finish(EngineState.DONE)
            raise StopIteration
        self.state = EngineState.FETCHING
        return _NEED_FETCH

    def _log_request(self) -> None:
        marker, batch_size = self._next_request
        logger.debug(f"[{self.name}] request #{self.fetch_count + 1}: batch size {batch_size}, continuation {marker}")

    def _accept(self, batch: Batch) -> None:
        self.fetch_count += 1
        for warning in batch.warnings:
            logger.warning(f"API warning [{warning.module}]: {warning.text}")
        self._buffer.extend(batch.items)

        transition = self._store.advance(batch.continuation)
        if transition is ContinuationState.REPEATED:
            self._on_continuation_loop(self._store.current())
            return
        if self._escalated:
            logger.info(f"[{self.name}] Successfully got out of the continuation loop.")
            self._escalated = False
        if transition is ContinuationState.COMPLETED:
            self._next_request = None
        else:
            if not batch.items:
                logger.warning(f"[{self.name}] Empty query page with continuation received.")
            self._next_request = (self._store.current(), self.pagination_size)

    def _on_continuation_loop(self, marker: Marker) -> None:
        logger.warning(
            f"[{self.name}] Continuation information provided by server response leads to infinite loop. {marker}"
        )
        behavior = self.options.continuation_loop_behavior
        if behavior is ContinuationLoopBehavior.STOP:
            logger.warning(f"[{self.name}] Stopping enumeration at the continuation loop.")
            self._next_request = None
        elif behavior is ContinuationLoopBehavior.FETCH_MORE and not self._escalated:
            self._escalated = True
            batch_size = self.options.fetch_more_size(self.pagination_size)
            logger.debug(f"[{self.name}] Try to fetch more with batch size {batch_size}.")
            self._next_request = (marker, batch_size)
        else:
            self._next_request = None
            self._pending_error = ContinuationLoopError(marker)

    def _deserialize(self, raw: Any) -> Any:
        if self.deserializer is None:
            return raw
        try:
            return self.deserializer(raw)
        except Exception:
            self._finish(EngineState.FAILED)
            raise


class EnumerationEngine(_EngineCore):
    """
    Blocking engine; an iterator over the deserialized items.

    The cancellation token is checked on every pull and before every request.
    """

    def __iter__(self) -> "EnumerationEngine":
        return self

    def __next__(self) -> Any:
        while True:
            raw = self._step()
            if raw is not _NEED_FETCH:
                return self._deserialize(raw)
            self._log_request()
            marker, batch_size = self._next_request
            try:
                batch = self.fetcher.fetch(self.base_params, marker, batch_size)
            except Exception:
                self._finish(EngineState.FAILED)
                raise
            self._accept(batch)

    def pull(self) -> Any:
        return next(self)


class AsyncEnumerationEngine(_EngineCore):
    """
    asyncio engine; an async iterator over the deserialized items.

    Suspends only while awaiting the transport. Cancelling the consuming task
    also finishes the engine.
    """

    def __aiter__(self) -> "AsyncEnumerationEngine":
        return self

    async def __anext__(self) -> Any:
        while True:
            try:
                raw = self._step()
            except StopIteration:
                raise StopAsyncIteration from None
            if raw is not _NEED_FETCH:
                return self._deserialize(raw)
            self._log_request()
            marker, batch_size = self._next_request
            try:
                batch = await self.fetcher.fetch(self.base_params, marker, batch_size)
            except asyncio.CancelledError:
                self._finish(EngineState.CANCELLED)
                raise
            except Exception:
                self._finish(EngineState.FAILED)
                raise
            self._accept(batch)

    async def pull(self) -> Any:
        return await self.__anext__()


def create_engine(
    fetcher: PageFetcher,
    base_params: Mapping[str, Any],
    deserializer: Optional[Deserializer] = None,
    pagination_size: int = 10,
    compatibility_options: Optional[CompatibilityOptions] = None,
    cancellation_token: Optional[CancellationToken] = None,
    name: Optional[str] = None,
) -> EnumerationEngine:
    return EnumerationEngine(
        fetcher,
        base_params,
        deserializer=deserializer,
        pagination_size=pagination_size,
        compatibility_options=compatibility_options,
        cancellation_token=cancellation_token,
        name=name,
    )


def create_async_engine(
    fetcher: AsyncPageFetcher,
    base_params: Mapping[str, Any],
    deserializer: Optional[Deserializer] = None,
    pagination_size: int = 10,
    compatibility_options: Optional[CompatibilityOptions] = None,
    cancellation_token: Optional[CancellationToken] = None,
    name: Optional[str] = None,
) -> AsyncEnumerationEngine:
    return AsyncEnumerationEngine(
        fetcher,
        base_params,
        deserializer=deserializer,
        pagination_size=pagination_size,
        compatibility_options=compatibility_options,
        cancellation_token=cancellation_token,
        name=name,
    )
