"""Browser session management using patchright.

The traversal drives one interactive page, so a session owns exactly one
browser, one context and one page. Authentication is cookie-based: cookies
captured with scripts/extract_cookies.py are loaded into the context. There
is no login flow.
"""

import json
import logging
from pathlib import Path
from types import TracebackType
from typing import Any

from patchright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from joblinks.core.config import BrowserConfig

logger = logging.getLogger(__name__)


class BrowserSession:
    """Async context manager that owns one patchright browser + context + page.

    Usage::

        async with BrowserSession(config) as session:
            adapter = LinkedInAdapter(session.page)
    """

    def __init__(self, config: BrowserConfig) -> None:
        self._config = config
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        """The single page for this session. Raises if not entered."""
        if self._page is None:
            msg = "BrowserSession not entered — use 'async with'"
            raise RuntimeError(msg)
        return self._page

    async def __aenter__(self) -> "BrowserSession":
        self._playwright = await async_playwright().start()
        # Headful: the result list and detail pane only render reliably on screen.
        self._browser = await self._playwright.chromium.launch(
            headless=False, slow_mo=self._config.slow_mo_ms,
        )
        self._context = await self._browser.new_context()

        cookies = _load_cookies(self._config.cookies_path)
        if cookies:
            await self._context.add_cookies(cookies)
            logger.info("Loaded %d cookies from %s", len(cookies), self._config.cookies_path)
        else:
            logger.warning("No cookies loaded — LinkedIn will show the logged-out job search")

        self._context.set_default_timeout(self._config.timeout_ms)
        self._page = await self._context.new_page()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._context is not None:
            await self._context.close()
        if self._browser is not None:
            await self._browser.close()
        if self._playwright is not None:
            await self._playwright.stop()
        self._page = None


def _load_cookies(path: str) -> list[dict[str, Any]]:
    """Load cookies from a JSON array file.

    Entries without a name and value are dropped. Returns an empty list on
    any failure.
    """
    cookie_path = Path(path)
    if not cookie_path.exists():
        logger.debug("Cookie file not found: %s", path)
        return []
    try:
        data = json.loads(cookie_path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to load cookies from %s: %s", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("Cookie file is not a JSON array: %s", path)
        return []
    cookies = [c for c in data if isinstance(c, dict) and "name" in c and "value" in c]
    if len(cookies) < len(data):
        logger.warning("Skipped %d malformed cookie entries in %s", len(data) - len(cookies), path)
    return cookies
