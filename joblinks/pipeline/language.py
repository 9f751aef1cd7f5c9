"""Description language detection backed by lingua."""

import logging
from typing import Protocol

from lingua import LanguageDetector as LinguaDetector
from lingua import LanguageDetectorBuilder

logger = logging.getLogger(__name__)

UNKNOWN_LANGUAGE = "unknown"


class LanguageDetecting(Protocol):
    """Anything that maps text to a lower-case language name."""

    def detect(self, text: str) -> str: ...


class LanguageDetector:
    """Detects the single most likely language of a text.

    Returns lower-case English names ("english", "german", ...), or
    "unknown" for blank text or when no language can be determined.
    The lingua model is built on first use and reused afterwards.
    """

    def __init__(self) -> None:
        self._detector: LinguaDetector | None = None

    def detect(self, text: str) -> str:
        if not text or not text.strip():
            return UNKNOWN_LANGUAGE
        language = self._get_detector().detect_language_of(text)
        if language is None:
            logger.debug("No language detected for %d chars of text", len(text))
            return UNKNOWN_LANGUAGE
        return language.name.lower()

    def _get_detector(self) -> LinguaDetector:
        if self._detector is None:
            logger.debug("Building lingua language detector")
            self._detector = LanguageDetectorBuilder.from_all_languages().build()
        return self._detector
