"""Accept/reject policy for extracted result items.

Decision order:
  1. Company dedup — a company already seen is rejected in every mode.
  2. Match mode:
       strict     — applicable, title include, not title exclude,
                    description match, language allowed
       permissive — applicable only
  3. The company is recorded as seen whatever the outcome.
"""

import logging
import re
from collections.abc import Iterator
from typing import NamedTuple

from joblinks.core.config import MatchMode, SearchCriteria
from joblinks.core.schemas import ResultItem

logger = logging.getLogger(__name__)

ANY_LANGUAGE = "any"


class SeenCompanies:
    """Insertion-ordered set of company names seen during one traversal."""

    def __init__(self) -> None:
        self._names: dict[str, None] = {}

    def add(self, name: str) -> None:
        self._names.setdefault(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


class FilterDecision(NamedTuple):
    """Outcome of a filter decision; ``reasons`` lists failed conditions."""

    accept: bool
    reasons: tuple[str, ...] = ()


class FilterPipeline:
    """Applies the match policy of one SearchCriteria to extracted items.

    Patterns are compiled once, case-insensitive, and matched with search
    semantics (anywhere in the text).
    """

    def __init__(self, criteria: SearchCriteria) -> None:
        self._mode = criteria.match_mode
        self._title_include = re.compile(criteria.title_include_pattern, re.IGNORECASE)
        self._title_exclude = (
            re.compile(criteria.title_exclude_pattern, re.IGNORECASE)
            if criteria.title_exclude_pattern is not None
            else None
        )
        self._description = re.compile(criteria.description_pattern, re.IGNORECASE)
        self._languages = frozenset(criteria.allowed_description_languages)

    def decide(self, item: ResultItem, seen_companies: SeenCompanies) -> FilterDecision:
        """Decide on ``item`` and record its company in ``seen_companies``."""
        if item.company_name in seen_companies:
            decision = FilterDecision(accept=False, reasons=("duplicate_company",))
        else:
            reasons = self._failed_conditions(item)
            decision = FilterDecision(accept=not reasons, reasons=reasons)

        seen_companies.add(item.company_name)

        if not decision.accept:
            logger.debug(
                "Rejected %r at %r: %s", item.title, item.company_name, ", ".join(decision.reasons),
            )
        return decision

    def _failed_conditions(self, item: ResultItem) -> tuple[str, ...]:
        failed: list[str] = []
        if not item.is_applicable:
            failed.append("not_applicable")
        if self._mode is MatchMode.PERMISSIVE:
            return tuple(failed)

        if not self._title_include.search(item.title):
            failed.append("title_not_included")
        if self._title_exclude is not None and self._title_exclude.search(item.title):
            failed.append("title_excluded")
        if not self._description.search(item.description_text):
            failed.append("description_mismatch")
        if not self._language_allowed(item.detected_language):
            failed.append("language_not_allowed")
        return tuple(failed)

    def _language_allowed(self, language: str) -> bool:
        return ANY_LANGUAGE in self._languages or language.lower() in self._languages
