"""Page traversal engine: walks result pages against a fixed total.

States:
  IDLE → FETCHING_PAGE → PAGE_READY → FETCHING_PAGE → ... → EXHAUSTED
  FETCHING_PAGE → FAILED when a page does not load or render in time (fatal).

The total comes from the SearchMetadata snapshot taken before traversal and is
never re-polled, so a result set that shrinks or grows mid-run can end the
traversal early or late.
"""

import logging
from collections.abc import AsyncGenerator, Callable
from enum import Enum
from typing import Any, NamedTuple

from joblinks.browser.actions import BrowserError, BrowserTimeoutError, page_delay
from joblinks.core.config import TraversalConfig
from joblinks.core.errors import PageLoadError, PageReadyTimeoutError
from joblinks.core.schemas import SearchMetadata

logger = logging.getLogger(__name__)


class TraversalState(str, Enum):
    IDLE = "idle"
    FETCHING_PAGE = "fetching_page"
    PAGE_READY = "page_ready"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class TraversalCursor:
    """Running count of items already processed. Only ever moves forward."""

    def __init__(self, page_size: int) -> None:
        self.items_seen = 0
        self.page_size = page_size

    def remaining(self, total: int) -> int:
        return max(total - self.items_seen, 0)

    def expected_on_page(self, total: int) -> int:
        """Minimum number of items the next page must render."""
        return min(self.page_size, self.remaining(total))

    def advance(self, count: int) -> None:
        if count < 0:
            msg = f"cursor cannot move backwards (count={count})"
            raise ValueError(msg)
        self.items_seen += count


class ResultPage(NamedTuple):
    """A rendered page of results, ready for item extraction."""

    number: int
    start: int
    found: int
    to_process: int


class PageTraversalEngine:
    """Fetches result pages one at a time until the snapshot total is reached.

    ``url_for_start`` maps an item offset to the page URL; it is the only
    thing that changes between page requests. ``item_selector`` matches one
    result item placeholder in the list.
    """

    def __init__(
        self,
        page: Any,
        metadata: SearchMetadata,
        url_for_start: Callable[[int], str],
        config: TraversalConfig,
        item_selector: str,
    ) -> None:
        self._page = page
        self._item_selector = item_selector
        self._total = metadata.total_available_items
        self._url_for_start = url_for_start
        self._config = config
        self.cursor = TraversalCursor(config.page_size)
        self.state = TraversalState.IDLE
        self.pages_fetched = 0

    @property
    def exhausted(self) -> bool:
        return self.cursor.items_seen >= self._total

    async def pages(self) -> AsyncGenerator[ResultPage, None]:
        """Yield each rendered page; resuming advances to the next one.

        The cursor advances by the number of items actually found on the page,
        so a short final page is not an error.

        Closing the generator early also ends in EXHAUSTED; the page being
        processed is not counted.

        Raises:
            PageReadyTimeoutError: a page did not render its expected items.
            PageLoadError: the browser failed to load a page.
        """
        if self.state is not TraversalState.IDLE:
            msg = f"traversal already started (state={self.state.value})"
            raise RuntimeError(msg)

        try:
            while not self.exhausted:
                result_page = await self._fetch_page()
                self.state = TraversalState.PAGE_READY
                yield result_page

                self.cursor.advance(result_page.found)
                if result_page.found == 0:
                    logger.warning(
                        "Page at start=%d had no items; stopping at %d/%d",
                        result_page.start, self.cursor.items_seen, self._total,
                    )
                    break
                if not self.exhausted:
                    await page_delay(self._config.page_delay_s)
        except GeneratorExit:
            self.state = TraversalState.EXHAUSTED
            logger.info(
                "Traversal closed early after %d page(s), %d/%d items seen",
                self.pages_fetched, self.cursor.items_seen, self._total,
            )
            raise

        self.state = TraversalState.EXHAUSTED
        logger.info(
            "Traversal exhausted after %d page(s), %d/%d items seen",
            self.pages_fetched, self.cursor.items_seen, self._total,
        )

    async def _fetch_page(self) -> ResultPage:
        self.state = TraversalState.FETCHING_PAGE
        start = self.cursor.items_seen
        expected = self.cursor.expected_on_page(self._total)
        url = self._url_for_start(start)
        logger.info("Fetching page %d (start=%d): %s", self.pages_fetched + 1, start, url)

        try:
            await self._page.goto(url, wait_until="load")
            await self._page.wait_for_selector(
                f"{self._item_selector}:nth-child({expected})",
                timeout=self._config.page_ready_timeout_ms,
            )
            items = await self._page.query_selector_all(self._item_selector)
        except BrowserTimeoutError as e:
            self.state = TraversalState.FAILED
            raise PageReadyTimeoutError(start, expected) from e
        except BrowserError as e:
            self.state = TraversalState.FAILED
            raise PageLoadError(start, str(e)) from e

        found = len(items)
        self.pages_fetched += 1
        logger.debug("Page %d: %d items found, %d expected", self.pages_fetched, found, expected)
        return ResultPage(
            number=self.pages_fetched,
            start=start,
            found=found,
            to_process=min(found, self.cursor.page_size),
        )
