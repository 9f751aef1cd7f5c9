"""LinkedIn search URL builder.

Pure functions — zero browser dependency.
"""

import logging
from urllib.parse import parse_qsl, quote_plus, urlencode, urlsplit, urlunsplit

from joblinks.core.config import DatePosted, SearchCriteria, WorkplaceMode

logger = logging.getLogger(__name__)

SEARCH_BASE = "https://www.linkedin.com/jobs/search/"

# --- Mapping dicts (URL concern) ---

WORKPLACE_MODE_CODES: dict[WorkplaceMode, int] = {
    WorkplaceMode.ON_SITE: 1,
    WorkplaceMode.REMOTE: 2,
    WorkplaceMode.HYBRID: 3,
}

DATE_POSTED_TOKENS: dict[DatePosted, str] = {
    DatePosted.PAST_24H: "r86400",
    DatePosted.PAST_WEEK: "r604800",
    DatePosted.PAST_MONTH: "r2592000",
}


def build_url(criteria: SearchCriteria, geo_id: str | None = None, start: int = 0) -> str:
    """Build a LinkedIn jobs search URL.

    Title, description and language filters are applied client-side and do
    not appear in the query.

    Args:
        criteria: The search being run.
        geo_id: Geographic id resolved from the search surface, if any.
        start: Result offset (items already seen).

    Returns:
        Fully qualified LinkedIn search URL with parameters in a fixed order.
    """
    params: dict[str, str] = {
        "keywords": criteria.keywords,
        "location": criteria.location,
        "start": str(start),
    }

    workplace = workplace_codes(criteria.workplace_modes)
    if workplace:
        params["f_WT"] = workplace

    if criteria.applicability_required:
        params["f_AL"] = "true"

    token = DATE_POSTED_TOKENS.get(criteria.date_posted)
    if token is not None:
        params["f_TPR"] = token

    if geo_id:
        params["geoId"] = geo_id

    url = f"{SEARCH_BASE}?{urlencode(params, quote_via=quote_plus)}"
    logger.debug("Built search URL: %s", url)
    return url


def with_start(url: str, start: int) -> str:
    """Return ``url`` with only its ``start`` parameter replaced."""
    parts = urlsplit(url)
    params = [
        (key, str(start) if key == "start" else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    if not any(key == "start" for key, _ in params):
        params.append(("start", str(start)))
    query = urlencode(params, quote_via=quote_plus)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def workplace_codes(modes: frozenset[WorkplaceMode]) -> str:
    """Comma-joined workplace codes in ascending order, independent of input order."""
    return ",".join(str(code) for code in sorted(WORKPLACE_MODE_CODES[m] for m in modes))
