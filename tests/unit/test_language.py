"""Tests for description language detection."""

import pytest

from joblinks.pipeline.language import UNKNOWN_LANGUAGE, LanguageDetector


@pytest.fixture(scope="module")
def detector() -> LanguageDetector:
    return LanguageDetector()


class TestLanguageDetector:
    def test_english(self, detector: LanguageDetector) -> None:
        text = (
            "We are looking for a senior software engineer to join our platform team. "
            "You will design and build reliable backend services in Python."
        )
        assert detector.detect(text) == "english"

    def test_german(self, detector: LanguageDetector) -> None:
        text = (
            "Wir suchen eine erfahrene Softwareentwicklerin oder einen erfahrenen "
            "Softwareentwickler für unser Team in Berlin. Du arbeitest mit modernen Technologien."
        )
        assert detector.detect(text) == "german"

    def test_returns_lowercase_name(self, detector: LanguageDetector) -> None:
        result = detector.detect("This is a plain English sentence about remote work.")
        assert result == result.lower()

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_is_unknown(self, detector: LanguageDetector, text: str) -> None:
        assert detector.detect(text) == UNKNOWN_LANGUAGE

    def test_model_built_once(self) -> None:
        detector = LanguageDetector()
        detector.detect("An English sentence to warm up the model.")
        built = detector._detector
        detector.detect("Another English sentence for the same model.")
        assert detector._detector is built
