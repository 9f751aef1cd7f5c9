"""LinkedIn result item extractor — turns the n-th result item into a ResultItem.

Extraction order per item:
  1. Read link + title from the item's anchor and click it (loads the detail pane).
  2. Wait until the description and an applicability indicator are both present.
  3. Company name, falling back to "Unknown" (never fails the item).
  4. Full description text.
  5. is_applicable from an enabled quick-apply button.
  6. Language of the description.

Any failure outside step 3 raises ItemExtractionError so the caller can skip
the item and move on.
"""

import logging
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlparse, urlunparse

from joblinks.browser.actions import BrowserTimeoutError
from joblinks.core.errors import ItemExtractionError
from joblinks.core.schemas import UNKNOWN_COMPANY, ResultItem
from joblinks.pipeline.language import LanguageDetecting
from joblinks.platforms.linkedin.selectors import (
    APPLIED_FEEDBACK,
    EASY_APPLY_BUTTON_ENABLED,
    JOB_DESCRIPTION,
    RESULT_ITEM_COMPANY_SELECTORS,
    RESULT_ITEM_LINK,
    RESULT_ITEM_TITLE,
    nth_item,
)

logger = logging.getLogger(__name__)

LINKEDIN_BASE = "https://www.linkedin.com"

# Description has text and either an apply button or "applied" feedback rendered.
_DETAIL_READY_JS = """
(s) => {
  const description = document.querySelector(s.description);
  const hasDescription = !!(description && description.innerText.trim());
  const hasStatus = !!(
    document.querySelector(s.applyEnabled) || document.querySelector(s.appliedFeedback)
  );
  return hasDescription && hasStatus;
}
"""


@runtime_checkable
class ElementLike(Protocol):
    """Minimal element interface so tests can use AsyncMock instead of patchright."""

    async def query_selector(self, selector: str) -> "ElementLike | None": ...
    async def get_attribute(self, name: str) -> str | None: ...
    async def inner_text(self) -> str: ...
    async def click(self) -> None: ...


class LinkedInItemExtractor:
    """Extracts result items from the current LinkedIn search results page."""

    def __init__(
        self,
        page: Any,
        detector: LanguageDetecting,
        *,
        detail_timeout_ms: int = 15000,
    ) -> None:
        self._page = page
        self._detector = detector
        self._detail_timeout_ms = detail_timeout_ms

    async def extract(self, index: int) -> ResultItem:
        """Extract the 1-based ``index``-th item on the current page.

        Raises:
            ItemExtractionError: any required part could not be read.
        """
        try:
            link, title = await self._open_item(index)
            await self._wait_for_detail(index)
            company = await self._parse_company(index)
            description = await self._parse_description(index)
            is_applicable = await self._page.query_selector(EASY_APPLY_BUTTON_ENABLED) is not None
            language = self._detector.detect(description)
        except ItemExtractionError:
            raise
        except Exception as e:
            raise ItemExtractionError(index, f"{type(e).__name__}: {e}") from e

        logger.debug(
            "Item %d: %r at %r (applicable=%s, language=%s)",
            index, title, company, is_applicable, language,
        )
        return ResultItem(
            link=link,
            title=title,
            company_name=company,
            description_text=description,
            is_applicable=is_applicable,
            detected_language=language,
        )

    # --- Private helpers ---

    async def _open_item(self, index: int) -> tuple[str, str]:
        """Read link and title from the item's anchor, then click it."""
        anchor = await self._page.query_selector(nth_item(index, RESULT_ITEM_LINK))
        if anchor is None:
            raise ItemExtractionError(index, "title link not found")

        href = await anchor.get_attribute("href")
        if not href or not href.strip():
            raise ItemExtractionError(index, "title link has no href")

        title = await self._parse_title(anchor)
        await anchor.click()
        return self._clean_url(href.strip()), title

    async def _parse_title(self, anchor: ElementLike) -> str:
        """Visible title span inside the anchor, else the anchor's first text line."""
        span = await anchor.query_selector(RESULT_ITEM_TITLE)
        if span is not None:
            text = await span.inner_text()
            if text and text.strip():
                return text.strip()
        raw = await anchor.inner_text()
        return raw.strip().split("\n")[0].strip() if raw else ""

    async def _wait_for_detail(self, index: int) -> None:
        selectors = {
            "description": JOB_DESCRIPTION,
            "applyEnabled": EASY_APPLY_BUTTON_ENABLED,
            "appliedFeedback": APPLIED_FEEDBACK,
        }
        try:
            await self._page.wait_for_function(
                _DETAIL_READY_JS, arg=selectors, timeout=self._detail_timeout_ms,
            )
        except BrowserTimeoutError as e:
            reason = f"detail pane not ready within {self._detail_timeout_ms}ms"
            raise ItemExtractionError(index, reason) from e

    async def _parse_company(self, index: int) -> str:
        """Company name of the item, or "Unknown" when it cannot be read."""
        for selector in RESULT_ITEM_COMPANY_SELECTORS:
            try:
                el = await self._page.query_selector(nth_item(index, selector))
                if el is None:
                    continue
                text = await el.inner_text()
                if text and text.strip():
                    return text.strip()
            except Exception:
                logger.debug("Company selector '%s' raised, trying next", selector, exc_info=True)
        return UNKNOWN_COMPANY

    async def _parse_description(self, index: int) -> str:
        el = await self._page.query_selector(JOB_DESCRIPTION)
        if el is None:
            raise ItemExtractionError(index, "description not found")
        return await el.inner_text()

    @staticmethod
    def _clean_url(href: str) -> str:
        """Strip tracking params and prepend domain if relative."""
        if href.startswith("/"):
            href = f"{LINKEDIN_BASE}{href}"
        parsed = urlparse(href)
        # Keep only scheme, netloc, path — drop query and fragment
        return urlunparse((parsed.scheme, parsed.netloc, parsed.path, "", "", ""))
