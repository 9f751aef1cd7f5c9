"""Error types raised by the search traversal.

Fatal errors (metadata, page load and readiness) propagate out of the result stream.
ItemExtractionError is recovered per item by the stream and only logged.
"""


class JobLinksError(Exception):
    """Base class for all joblinks errors."""


class SearchMetadataError(JobLinksError):
    """The search surface did not yield usable metadata (geoId, result count)."""


class MetadataTimeoutError(SearchMetadataError):
    """geoId or the result-count indicator did not appear within budget."""


class PageReadyTimeoutError(JobLinksError):
    """A result page did not render its minimum expected items in time."""

    def __init__(self, start: int, expected: int) -> None:
        super().__init__(
            f"Result page at start={start} did not render {expected} item(s) in time",
        )
        self.start = start
        self.expected = expected


class PageLoadError(JobLinksError):
    """The browser failed to load a result page (network or navigation error)."""

    def __init__(self, start: int, reason: str) -> None:
        super().__init__(f"Result page at start={start} failed to load: {reason}")
        self.start = start
        self.reason = reason


class ItemExtractionError(JobLinksError):
    """Extraction of a single result item failed; the item is skipped."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"Item {index}: {reason}")
        self.index = index
        self.reason = reason
