"""Unit tests for the asyncio enumeration engine, driven through asyncio.run."""
import asyncio

import pytest

from conftest import AsyncScriptedFetcher, batch
from wikiclient.errors import ContinuationLoopError, EnumerationCancelled
from wikiclient.paging import (
    CompatibilityOptions,
    ContinuationLoopBehavior,
    EngineState,
    create_async_engine,
)

BASE = {"action": "query", "list": "allpages"}


def make_engine(batches, behavior=ContinuationLoopBehavior.THROW, **kwargs):
    fetcher = AsyncScriptedFetcher(batches)
    options = CompatibilityOptions(continuation_loop_behavior=behavior, fetch_more_limit=500)
    return create_async_engine(fetcher, BASE, compatibility_options=options, **kwargs), fetcher


async def collect(engine, count=None):
    items = []
    async for item in engine:
        items.append(item)
        if count is not None and len(items) == count:
            break
    return items


class TestAsyncEnumeration:
    def test_full_enumeration(self, example_batches):
        engine, fetcher = make_engine(example_batches)
        assert asyncio.run(collect(engine)) == ["a", "b", "c", "d", "e"]
        assert [marker for marker, _ in fetcher.calls] == [None, {"continue": "M1"}, {"continue": "M2"}]
        assert engine.state is EngineState.DONE

    def test_take_three_needs_two_requests(self, example_batches):
        engine, fetcher = make_engine(example_batches)
        assert asyncio.run(collect(engine, 3)) == ["a", "b", "c"]
        assert len(fetcher.calls) == 2

    def test_no_request_before_first_pull(self, example_batches):
        engine, fetcher = make_engine(example_batches)
        assert fetcher.calls == []

    def test_pull_after_done_raises_stop_async_iteration(self, example_batches):
        engine, _ = make_engine(example_batches)

        async def scenario():
            await collect(engine)
            with pytest.raises(StopAsyncIteration):
                await engine.pull()

        asyncio.run(scenario())

    def test_continuation_loop_raises(self):
        engine, _ = make_engine([
            batch(["a"], {"continue": "M1"}),
            batch(["b"], {"continue": "M1"}),
        ])
        items = []

        async def scenario():
            async for item in engine:
                items.append(item)

        with pytest.raises(ContinuationLoopError):
            asyncio.run(scenario())
        assert items == ["a", "b"]
        assert engine.state is EngineState.FAILED

    def test_fetch_more(self):
        engine, fetcher = make_engine(
            [
                batch(["a"], {"continue": "M1"}),
                batch([], {"continue": "M1"}),
                batch(["b"]),
            ],
            behavior=ContinuationLoopBehavior.FETCH_MORE,
        )
        assert asyncio.run(collect(engine)) == ["a", "b"]
        assert [size for _, size in fetcher.calls] == [10, 10, 100]

    def test_token_cancellation(self, example_batches):
        engine, fetcher = make_engine(example_batches)

        async def scenario():
            assert await engine.pull() == "a"
            engine.cancel()
            with pytest.raises(EnumerationCancelled):
                await engine.pull()

        asyncio.run(scenario())
        assert engine.state is EngineState.CANCELLED
        assert len(fetcher.calls) == 1

    def test_task_cancellation_finishes_engine(self):
        class BlockingFetcher:
            def __init__(self):
                self.started = None

            async def fetch(self, base_params, marker, batch_size):
                self.started.set()
                await asyncio.sleep(3600)

        fetcher = BlockingFetcher()
        engine = create_async_engine(fetcher, BASE)

        async def scenario():
            fetcher.started = asyncio.Event()
            task = asyncio.ensure_future(engine.pull())
            await fetcher.started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            with pytest.raises(EnumerationCancelled):
                await engine.pull()

        asyncio.run(scenario())
        assert engine.state is EngineState.CANCELLED

    def test_independent_engines_run_concurrently(self, example_batches):
        first, first_fetcher = make_engine(list(example_batches))
        second, second_fetcher = make_engine([batch(["x"], {"continue": "N1"}), batch(["y"])])

        async def scenario():
            return await asyncio.gather(collect(first), collect(second))

        first_items, second_items = asyncio.run(scenario())
        assert first_items == ["a", "b", "c", "d", "e"]
        assert second_items == ["x", "y"]
        assert second_fetcher.calls == [(None, 10), ({"continue": "N1"}, 10)]
