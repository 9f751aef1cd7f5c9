"""Core data models for the job link fetcher."""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_COMPANY = "Unknown"


class SearchMetadata(BaseModel):
    """Session-scoped search facts. Derived once per traversal, never refreshed."""

    model_config = ConfigDict(frozen=True)

    geo_id: str | None = None
    total_available_items: int = Field(default=0, ge=0)


class ResultItem(BaseModel):
    """One extracted result item. Ephemeral: decided on, then discarded."""

    model_config = ConfigDict(frozen=True)

    link: str
    title: str
    company_name: str = UNKNOWN_COMPANY
    description_text: str = ""
    is_applicable: bool = False
    detected_language: str = "unknown"


class JobLink(NamedTuple):
    """An accepted (link, title, company_name) triple yielded to the caller."""

    link: str
    title: str
    company_name: str

    @classmethod
    def from_item(cls, item: ResultItem) -> "JobLink":
        return cls(item.link, item.title, item.company_name)
