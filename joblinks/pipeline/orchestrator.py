"""Orchestrator: runs configured searches and collects the matching links.

Data flow:
  1. adapter.search(criteria) → lazy ResultStream
  2. Pull links until the stream ends or the search's limit is reached
  3. Close the stream (stops traversal mid-page if needed)
  4. Summarize per search; optional JSON export to stdout

Links are handed back to the caller, never stored.
"""

import json
import logging

from joblinks.core.config import SearchCriteria, Settings
from joblinks.core.errors import JobLinksError
from joblinks.core.schemas import JobLink
from joblinks.pipeline.stream import StreamStats
from joblinks.platforms.base import PlatformAdapter

logger = logging.getLogger(__name__)


class SearchResult:
    """Summary of a single search execution."""

    def __init__(
        self,
        criteria: SearchCriteria,
        platform: str,
        links: list[JobLink],
        stats: StreamStats,
        error: str | None = None,
    ) -> None:
        self.criteria = criteria
        self.platform = platform
        self.links = links
        self.stats = stats
        self.error = error

    @property
    def keywords(self) -> str:
        return self.criteria.keywords


async def run_search(
    criteria: SearchCriteria,
    adapter: PlatformAdapter,
    limit: int | None = None,
) -> SearchResult:
    """Pull up to ``limit`` matching links for one search.

    ``limit`` overrides ``criteria.limit``; None on both drains the stream.
    A fatal traversal error ends the search; links already pulled are kept
    and the error is recorded on the result.
    """
    limit = limit if limit is not None else criteria.limit
    stream = adapter.search(criteria)
    links: list[JobLink] = []
    error: str | None = None

    try:
        async for link in stream:
            links.append(link)
            if limit is not None and len(links) >= limit:
                logger.info("Reached limit of %d links for '%s'", limit, criteria.keywords)
                break
    except JobLinksError as e:
        logger.error("Search '%s' aborted: %s", criteria.keywords, e)
        error = str(e)
    finally:
        await stream.aclose()

    logger.info("Search '%s': %d links (%r)", criteria.keywords, len(links), stream.stats)
    return SearchResult(
        criteria=criteria,
        platform=adapter.platform_id,
        links=links,
        stats=stream.stats,
        error=error,
    )


async def run_all_searches(
    settings: Settings,
    adapter: PlatformAdapter,
    limit: int | None = None,
) -> list[SearchResult]:
    """Run all configured searches one after another on the same adapter."""
    results: list[SearchResult] = []
    for criteria in settings.searches:
        results.append(await run_search(criteria, adapter, limit))
    return results


def export_results_json(results: list[SearchResult]) -> str:
    """Export collected links as a JSON string."""
    data = []
    for r in results:
        for link in r.links:
            data.append({
                "keywords": r.keywords,
                "location": r.criteria.location,
                "platform": r.platform,
                "link": link.link,
                "title": link.title,
                "company": link.company_name,
            })
    return json.dumps(data, indent=2)
