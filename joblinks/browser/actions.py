"""Browser pacing and the patchright error types the pipeline converts.

Every pause goes through random_sleep(). The inter-page delay is a rate limit
against anti-automation defenses, so page_delay() never waits less than
PAGE_DELAY_FLOOR whatever the caller asks for.
"""

import asyncio
import logging
import random

from patchright.async_api import Error as BrowserError
from patchright.async_api import TimeoutError as BrowserTimeoutError

logger = logging.getLogger(__name__)

__all__ = [
    "PAGE_DELAY_FLOOR",
    "BrowserError",
    "BrowserTimeoutError",
    "page_delay",
    "random_sleep",
]

PAGE_DELAY_FLOOR = 2.0


async def random_sleep(min_s: float, max_s: float) -> float:
    """Pause for a duration drawn uniformly from [min_s, max_s]; return it.

    Negative bounds count as zero. An empty range (max_s <= min_s) pauses
    exactly min_s.
    """
    low = max(min_s, 0.0)
    duration = low if max_s <= low else random.uniform(low, max_s)
    await asyncio.sleep(duration)
    return duration


async def page_delay(seconds: float = PAGE_DELAY_FLOOR) -> float:
    """Fixed pause between result pages, never shorter than PAGE_DELAY_FLOOR."""
    seconds = max(seconds, PAGE_DELAY_FLOOR)
    logger.debug("Waiting %.1fs before next page", seconds)
    return await random_sleep(seconds, seconds)
