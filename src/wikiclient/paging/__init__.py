from .continuation import ContinuationState, ContinuationStore
from .engine import (
    AsyncEnumerationEngine,
    CancellationToken,
    EngineState,
    EnumerationEngine,
    create_async_engine,
    create_engine,
)
from .fetcher import (
    ApiWarning,
    AsyncPageFetcher,
    Batch,
    PageFetcher,
    PagePropertyExtractor,
    QueryListExtractor,
    QueryPagesExtractor,
    ResponseExtractor,
    WikibaseSearchExtractor,
)
from .options import CompatibilityOptions, ContinuationLoopBehavior

__all__ = [
    "ApiWarning",
    "AsyncEnumerationEngine",
    "AsyncPageFetcher",
    "Batch",
    "CancellationToken",
    "CompatibilityOptions",
    "ContinuationLoopBehavior",
    "ContinuationState",
    "ContinuationStore",
    "EngineState",
    "EnumerationEngine",
    "PageFetcher",
    "PagePropertyExtractor",
    "QueryListExtractor",
    "QueryPagesExtractor",
    "ResponseExtractor",
    "WikibaseSearchExtractor",
    "create_async_engine",
    "create_engine",
]
