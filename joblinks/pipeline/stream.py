"""Lazy stream of accepted job links.

Each pull may fetch a new page and try several items before one is accepted.
Items are handled strictly one at a time; nothing runs ahead of the consumer.
"""

import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import aclosing
from typing import Protocol

from joblinks.core.errors import ItemExtractionError
from joblinks.core.schemas import JobLink, ResultItem
from joblinks.pipeline.matcher import FilterPipeline, SeenCompanies
from joblinks.pipeline.traversal import PageTraversalEngine

logger = logging.getLogger(__name__)


class ItemExtracting(Protocol):
    """Anything that extracts the 1-based n-th item of the current page."""

    async def extract(self, index: int) -> ResultItem: ...


class StreamStats:
    """Counters for one traversal, readable while or after streaming."""

    def __init__(self) -> None:
        self.pages_fetched = 0
        self.items_seen = 0
        self.items_extracted = 0
        self.extraction_failures = 0
        self.accepted = 0

    def __repr__(self) -> str:
        return (
            f"StreamStats(pages={self.pages_fetched}, seen={self.items_seen}, "
            f"extracted={self.items_extracted}, failed={self.extraction_failures}, "
            f"accepted={self.accepted})"
        )


class ResultStream:
    """Single-pass async iterator of accepted JobLink triples.

    Usage::

        stream = adapter.search(criteria)
        async for link, title, company in stream:
            ...
        await stream.aclose()  # optional, stops early

    ``open_traversal`` is awaited on the first pull and returns the engine for
    this search (metadata is resolved there). Iterating again after the stream
    ended or was closed yields nothing.
    """

    def __init__(
        self,
        open_traversal: Callable[[], Awaitable[PageTraversalEngine]],
        extractor: ItemExtracting,
        pipeline: FilterPipeline,
    ) -> None:
        self._open_traversal = open_traversal
        self._extractor = extractor
        self._pipeline = pipeline
        self._seen_companies = SeenCompanies()
        self._generator: AsyncGenerator[JobLink, None] | None = None
        self._closed = False
        self.stats = StreamStats()

    @property
    def seen_companies(self) -> SeenCompanies:
        return self._seen_companies

    def __aiter__(self) -> "ResultStream":
        return self

    async def __anext__(self) -> JobLink:
        if self._closed:
            raise StopAsyncIteration
        if self._generator is None:
            self._generator = self._produce()
        try:
            return await self._generator.__anext__()
        except BaseException:
            self._closed = True
            raise

    async def aclose(self) -> None:
        """Stop the stream without visiting the rest of the current page."""
        self._closed = True
        if self._generator is not None:
            await self._generator.aclose()

    async def _produce(self) -> AsyncGenerator[JobLink, None]:
        engine = await self._open_traversal()
        # Closing this generator must also close the engine's page generator.
        async with aclosing(engine.pages()) as pages:
            async for result_page in pages:
                self.stats.pages_fetched += 1
                for index in range(1, result_page.to_process + 1):
                    self.stats.items_seen += 1
                    try:
                        item = await self._extractor.extract(index)
                    except ItemExtractionError:
                        self.stats.extraction_failures += 1
                        logger.warning(
                            "Skipping item %d on page %d",
                            index, result_page.number, exc_info=True,
                        )
                        continue
                    self.stats.items_extracted += 1

                    decision = self._pipeline.decide(item, self._seen_companies)
                    if decision.accept:
                        self.stats.accepted += 1
                        logger.info("Match: %r at %r", item.title, item.company_name)
                        yield JobLink.from_item(item)
