"""LinkedIn platform adapter — wires metadata, URL builder, traversal, extractor and filters."""

import logging
from functools import partial
from typing import Any

from joblinks.core.config import SearchCriteria, TraversalConfig
from joblinks.pipeline.language import LanguageDetecting, LanguageDetector
from joblinks.pipeline.matcher import FilterPipeline
from joblinks.pipeline.stream import ResultStream
from joblinks.pipeline.traversal import PageTraversalEngine
from joblinks.platforms.base import PlatformAdapter
from joblinks.platforms.linkedin.context import resolve_search_metadata
from joblinks.platforms.linkedin.parser import LinkedInItemExtractor
from joblinks.platforms.linkedin.searcher import build_url, with_start
from joblinks.platforms.linkedin.selectors import RESULT_ITEM

logger = logging.getLogger(__name__)


class LinkedInAdapter(PlatformAdapter):
    """LinkedIn search adapter.

    Requires an authenticated browser page object (patchright Page) injected
    via constructor. The page is driven by one search at a time.
    """

    def __init__(
        self,
        page: Any,
        config: TraversalConfig | None = None,
        detector: LanguageDetecting | None = None,
    ) -> None:
        self._page = page
        self._config = config or TraversalConfig()
        self._detector = detector or LanguageDetector()

    @property
    def platform_id(self) -> str:
        return "linkedin"

    def search(self, criteria: SearchCriteria) -> ResultStream:
        """Return a lazy stream of links matching ``criteria``.

        Nothing touches the browser until the first item is pulled.
        """
        extractor = LinkedInItemExtractor(
            self._page, self._detector, detail_timeout_ms=self._config.detail_timeout_ms,
        )
        return ResultStream(
            partial(self._open_traversal, criteria),
            extractor,
            FilterPipeline(criteria),
        )

    async def _open_traversal(self, criteria: SearchCriteria) -> PageTraversalEngine:
        """Resolve search metadata once and build the traversal engine for it."""
        logger.info(
            "Searching '%s' in '%s' (%s mode)",
            criteria.keywords, criteria.location, criteria.match_mode.value,
        )
        metadata = await resolve_search_metadata(
            self._page,
            criteria.keywords,
            criteria.location,
            timeout_ms=self._config.metadata_timeout_ms,
        )
        base_url = build_url(criteria, metadata.geo_id)
        return PageTraversalEngine(
            self._page,
            metadata,
            partial(with_start, base_url),
            self._config,
            RESULT_ITEM,
        )
