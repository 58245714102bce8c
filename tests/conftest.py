#
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from wikiclient.paging import Batch  # noqa: E402


class ScriptedTransport:
    """Blocking transport answering ``send`` with canned responses, in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def send(self, params):
        self.calls.append(dict(params))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {params}")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


class AsyncScriptedTransport(ScriptedTransport):
    async def send(self, params):
        return ScriptedTransport.send(self, params)


class ScriptedFetcher:
    """Page fetcher returning canned batches and recording (marker, batch size)."""

    def __init__(self, batches):
        self.batches = list(batches)
        self.calls = []

    def fetch(self, base_params, marker, batch_size):
        self.calls.append((marker, batch_size))
        if not self.batches:
            raise AssertionError(f"Unexpected fetch with marker {marker}")
        batch = self.batches.pop(0)
        if isinstance(batch, BaseException):
            raise batch
        return batch


class OffsetFetcher:
    """Serves a fixed server-side list, honouring the requested batch size."""

    def __init__(self, items):
        self.items = list(items)
        self.calls = []

    def fetch(self, base_params, marker, batch_size):
        self.calls.append((marker, batch_size))
        offset = marker["offset"] if marker else 0
        end = offset + batch_size
        continuation = {"offset": end, "continue": "-||"} if end < len(self.items) else None
        return Batch(items=self.items[offset:end], continuation=continuation)


class AsyncScriptedFetcher(ScriptedFetcher):
    async def fetch(self, base_params, marker, batch_size):
        return ScriptedFetcher.fetch(self, base_params, marker, batch_size)


def batch(items, continuation=None):
    return Batch(items=list(items), continuation=continuation)


@pytest.fixture
def example_batches():
    """Three batches: [a, b] -> M1, [c, d] -> M2, [e] -> end."""
    return [
        batch(["a", "b"], {"continue": "M1"}),
        batch(["c", "d"], {"continue": "M2"}),
        batch(["e"]),
    ]


@pytest.fixture
def wiki_logger():
    """Restore the ``wikiclient`` logger after a test reconfigures it."""
    import logging

    logger = logging.getLogger("wikiclient")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
