"""Configuration models and YAML loader for the job link fetcher."""

import re
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorkplaceMode(str, Enum):
    """Where the job is performed."""

    ON_SITE = "on-site"
    REMOTE = "remote"
    HYBRID = "hybrid"


class DatePosted(str, Enum):
    """Recency window for postings."""

    NONE = "none"
    PAST_24H = "past-24h"
    PAST_WEEK = "past-week"
    PAST_MONTH = "past-month"


class MatchMode(str, Enum):
    """strict applies every content filter, permissive only the applicability check."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


_WORKPLACE_ALIASES: dict[str, str] = {
    "onsite": "on-site",
    "on_site": "on-site",
    "on site": "on-site",
}


class SearchCriteria(BaseModel):
    """A single search entry. Immutable for the duration of one traversal."""

    model_config = ConfigDict(frozen=True)

    keywords: str
    location: str = ""
    workplace_modes: frozenset[WorkplaceMode] = frozenset()
    date_posted: DatePosted = DatePosted.NONE
    title_include_pattern: str = ""
    title_exclude_pattern: str | None = None
    description_pattern: str = ""
    allowed_description_languages: list[str] = Field(default_factory=lambda: ["any"])
    applicability_required: bool = True
    match_mode: MatchMode = MatchMode.STRICT
    limit: int | None = Field(default=None, ge=1)

    @field_validator("keywords")
    @classmethod
    def keywords_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "keywords must not be empty"
            raise ValueError(msg)
        return v.strip()

    @field_validator("location")
    @classmethod
    def strip_location(cls, v: str) -> str:
        return v.strip()

    @field_validator("workplace_modes", mode="before")
    @classmethod
    def normalize_workplace_modes(cls, v: Any) -> Any:
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        normalized = []
        for mode in v:
            if isinstance(mode, str):
                key = mode.lower().strip()
                mode = _WORKPLACE_ALIASES.get(key, key)
            normalized.append(mode)
        return frozenset(normalized)

    @field_validator("date_posted", mode="before")
    @classmethod
    def date_posted_null_is_none(cls, v: Any) -> Any:
        return DatePosted.NONE if v is None else v

    @field_validator("title_include_pattern", "title_exclude_pattern", "description_pattern")
    @classmethod
    def pattern_compiles(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            msg = f"invalid regular expression {v!r}: {e}"
            raise ValueError(msg) from e
        return v

    @field_validator("allowed_description_languages")
    @classmethod
    def normalize_languages(cls, v: list[str]) -> list[str]:
        languages = [lang.lower().strip() for lang in v if lang.strip()]
        if not languages:
            msg = "allowed_description_languages must not be empty (use 'any')"
            raise ValueError(msg)
        return languages


class TraversalConfig(BaseModel):
    """Paging, wait budgets, and pacing for result traversal."""

    page_size: int = Field(default=7, ge=1, le=25)
    page_ready_timeout_ms: int = Field(default=5000, ge=1000)
    metadata_timeout_ms: int = Field(default=5000, ge=1000)
    detail_timeout_ms: int = Field(default=15000, ge=1000)
    # Rate limit against anti-automation defenses, not a tuning knob.
    page_delay_s: float = Field(default=2.0, ge=2.0)


class BrowserConfig(BaseModel):
    """Browser session configuration."""

    cookies_path: str = "config/linkedin_cookies.json"
    timeout_ms: int = Field(default=30000, ge=1000)
    slow_mo_ms: int = Field(default=0, ge=0)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    traversal: TraversalConfig = Field(default_factory=TraversalConfig)
    searches: list[SearchCriteria] = Field(default_factory=list, validate_default=True)

    @field_validator("searches")
    @classmethod
    def at_least_one_search(cls, v: list[SearchCriteria]) -> list[SearchCriteria]:
        if not v:
            msg = "at least one search must be configured"
            raise ValueError(msg)
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
