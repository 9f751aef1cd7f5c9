"""LinkedIn DOM selector constants.

Selectors combined with ``:nth-child(n)`` are single strings; the rest are
tuples tried in order until one matches.
"""

# --- Search box (jobs landing page) ---
JOBS_HOME_URL: str = "https://www.linkedin.com/jobs"
KEYWORD_INPUT: str = 'input[id*="jobs-search-box-keyword-id"]'
LOCATION_INPUT: str = 'input[id*="jobs-search-box-location-id"]'
SEARCH_SUBMIT_BUTTON: str = "button.jobs-search-box__submit-button"

# --- Result count ("1,234 results") ---
RESULT_COUNT: str = "small.jobs-search-results-list__text, .jobs-search-results-list__subtitle"

# --- Result list item and its parts ---
RESULT_ITEM: str = "li.scaffold-layout__list-item"
RESULT_ITEM_LINK: str = "a.job-card-list__title, a.job-card-container__link"
RESULT_ITEM_TITLE: str = 'span[aria-hidden="true"]'

RESULT_ITEM_COMPANY_SELECTORS: tuple[str, ...] = (
    ".artdeco-entity-lockup__subtitle",
    "span.job-card-container__primary-description",
    "span.job-card-container__company-name",
)

# --- Detail pane ---
JOB_DESCRIPTION: str = "div#job-details"
EASY_APPLY_BUTTON_ENABLED: str = "button.jobs-apply-button:enabled"
APPLIED_FEEDBACK: str = ".artdeco-inline-feedback"


def nth_item(index: int, descendant: str = "") -> str:
    """Selector for the 1-based ``index``-th result item, optionally a descendant of it."""
    selector = f"{RESULT_ITEM}:nth-child({index})"
    if not descendant:
        return selector
    # Scope every alternative of a selector list under the item.
    return ", ".join(f"{selector} {part.strip()}" for part in descendant.split(","))
