"""Abstract base class for platform adapters."""

from abc import ABC, abstractmethod

from joblinks.core.config import SearchCriteria
from joblinks.pipeline.stream import ResultStream


class PlatformAdapter(ABC):
    """Base class that every platform adapter must implement."""

    @property
    @abstractmethod
    def platform_id(self) -> str:
        """Unique identifier for this platform (e.g. 'linkedin')."""

    @abstractmethod
    def search(self, criteria: SearchCriteria) -> ResultStream:
        """Start a search and return a lazy stream of accepted job links."""
