"""Search context resolution: submit the search box and read session metadata.

The geoId LinkedIn assigns to the typed location and the total result count
are read once here and reused for the whole traversal.
"""

import logging
import re
from typing import Any

from joblinks.browser.actions import BrowserError, BrowserTimeoutError
from joblinks.core.errors import MetadataTimeoutError, SearchMetadataError
from joblinks.core.schemas import SearchMetadata
from joblinks.platforms.linkedin.selectors import (
    JOBS_HOME_URL,
    KEYWORD_INPUT,
    LOCATION_INPUT,
    RESULT_COUNT,
    SEARCH_SUBMIT_BUTTON,
)

logger = logging.getLogger(__name__)

_HAS_GEO_ID_JS = "() => new URLSearchParams(document.location.search).has('geoId')"
_GET_GEO_ID_JS = "() => new URLSearchParams(document.location.search).get('geoId')"
_SET_VALUE_JS = "(el, value) => { el.value = value; }"

_NUMBER_RE = re.compile(r"\d[\d,.]*")
_RESULTS_RE = re.compile(r"(\d[\d,.]*)\s*results?\b", re.IGNORECASE)


async def resolve_search_metadata(
    page: Any,
    keywords: str,
    location: str,
    *,
    timeout_ms: int = 5000,
) -> SearchMetadata:
    """Submit keywords and location, then read geoId and the total result count.

    Leaves ``page`` on the search results.

    Raises:
        MetadataTimeoutError: geoId or the result count did not appear in time.
        SearchMetadataError: the jobs home failed to load, or the result count
            text could not be parsed.
    """
    try:
        await page.goto(JOBS_HOME_URL, wait_until="load")
    except BrowserTimeoutError as e:
        msg = f"Jobs home did not load: {e}"
        raise MetadataTimeoutError(msg) from e
    except BrowserError as e:
        msg = f"Jobs home failed to load: {e}"
        raise SearchMetadataError(msg) from e

    await page.type(KEYWORD_INPUT, keywords)
    try:
        await page.wait_for_selector(LOCATION_INPUT, state="visible", timeout=timeout_ms)
    except BrowserTimeoutError as e:
        msg = f"Location input did not appear within {timeout_ms}ms"
        raise MetadataTimeoutError(msg) from e

    location_input = await page.query_selector(LOCATION_INPUT)
    if location_input is not None:
        await location_input.evaluate(_SET_VALUE_JS, location)
    # A typed space makes the site pick up the programmatically set value.
    await page.type(LOCATION_INPUT, " ")
    await page.click(SEARCH_SUBMIT_BUTTON)

    try:
        await page.wait_for_function(_HAS_GEO_ID_JS, timeout=timeout_ms)
    except BrowserTimeoutError as e:
        msg = f"Search URL carried no geoId within {timeout_ms}ms"
        raise MetadataTimeoutError(msg) from e
    geo_id = await page.evaluate(_GET_GEO_ID_JS)

    try:
        count_el = await page.wait_for_selector(RESULT_COUNT, timeout=timeout_ms)
    except BrowserTimeoutError as e:
        msg = f"Result count did not appear within {timeout_ms}ms"
        raise MetadataTimeoutError(msg) from e
    if count_el is None:
        msg = "Result count element missing"
        raise MetadataTimeoutError(msg)

    total = parse_result_count(await count_el.inner_text())
    metadata = SearchMetadata(geo_id=str(geo_id) if geo_id else None, total_available_items=total)
    logger.info(
        "Search '%s' in '%s': geoId=%s, %d results",
        keywords, location, metadata.geo_id, metadata.total_available_items,
    )
    return metadata


def parse_result_count(text: str | None) -> int:
    """Parse LinkedIn's result count text ("1,234 results") into an int.

    The number directly before "result(s)" wins, so a range such as
    "Showing 1-25 of 1,234 results" reads as 1234. Without that word
    (localized UI) the last number in the text is used.
    """
    text = text or ""
    match = _RESULTS_RE.search(text)
    if match is not None:
        raw = match.group(1)
    else:
        numbers = _NUMBER_RE.findall(text)
        if not numbers:
            msg = f"Cannot parse result count from {text!r}"
            raise SearchMetadataError(msg)
        raw = numbers[-1]
    return int(re.sub(r"\D", "", raw))
