"""Tests for the LinkedIn search URL builder."""

from urllib.parse import parse_qs, parse_qsl, urlparse

import pytest

from joblinks.core.config import DatePosted, SearchCriteria, WorkplaceMode
from joblinks.platforms.linkedin.searcher import (
    DATE_POSTED_TOKENS,
    SEARCH_BASE,
    WORKPLACE_MODE_CODES,
    build_url,
    with_start,
    workplace_codes,
)


def _parse(url: str) -> dict[str, list[str]]:
    """Parse URL and return query params as dict."""
    return parse_qs(urlparse(url).query, keep_blank_values=True)


def _criteria(**overrides: object) -> SearchCriteria:
    fields: dict[str, object] = {"keywords": "Python Engineer", "location": "Berlin"}
    fields.update(overrides)
    return SearchCriteria(**fields)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# TestBuildUrl
# ---------------------------------------------------------------------------


class TestBuildUrl:
    """URL builder: encoding, parameters, determinism."""

    def test_base_url(self) -> None:
        assert build_url(_criteria()).startswith(f"{SEARCH_BASE}?")

    def test_keywords_and_location(self) -> None:
        params = _parse(build_url(_criteria(location="New York, NY")))
        assert params["keywords"] == ["Python Engineer"]
        assert params["location"] == ["New York, NY"]

    def test_keyword_special_chars(self) -> None:
        url = build_url(_criteria(keywords="C++ Developer"))
        assert "C%2B%2B+Developer" in url

    def test_start_defaults_to_zero(self) -> None:
        assert _parse(build_url(_criteria()))["start"] == ["0"]

    def test_start_offset(self) -> None:
        assert _parse(build_url(_criteria(), start=14))["start"] == ["14"]

    def test_geo_id_present(self) -> None:
        params = _parse(build_url(_criteria(), geo_id="103035651"))
        assert params["geoId"] == ["103035651"]

    def test_geo_id_absent(self) -> None:
        assert "geoId" not in _parse(build_url(_criteria()))

    def test_applicability_flag(self) -> None:
        assert _parse(build_url(_criteria()))["f_AL"] == ["true"]

    def test_applicability_flag_off(self) -> None:
        params = _parse(build_url(_criteria(applicability_required=False)))
        assert "f_AL" not in params

    def test_single_workplace_mode(self) -> None:
        params = _parse(build_url(_criteria(workplace_modes=["remote"])))
        assert params["f_WT"] == ["2"]

    @pytest.mark.parametrize(
        "modes",
        [
            ["hybrid", "on-site", "remote"],
            ["remote", "hybrid", "on-site"],
            ["on-site", "remote", "hybrid"],
        ],
    )
    def test_workplace_codes_ascending_regardless_of_order(self, modes: list[str]) -> None:
        params = _parse(build_url(_criteria(workplace_modes=modes)))
        assert params["f_WT"] == ["1,2,3"]

    def test_no_workplace_mode_omits_param(self) -> None:
        assert "f_WT" not in _parse(build_url(_criteria()))

    @pytest.mark.parametrize(
        ("date_posted", "token"),
        [
            ("past-24h", "r86400"),
            ("past-week", "r604800"),
            ("past-month", "r2592000"),
        ],
    )
    def test_date_posted_tokens(self, date_posted: str, token: str) -> None:
        params = _parse(build_url(_criteria(date_posted=date_posted)))
        assert params["f_TPR"] == [token]

    def test_date_posted_none_omits_param(self) -> None:
        assert "f_TPR" not in _parse(build_url(_criteria()))

    def test_client_side_filters_not_in_query(self) -> None:
        url = build_url(_criteria(
            keywords="Python",
            title_include_pattern="engineer",
            title_exclude_pattern="intern",
            description_pattern="remote",
            allowed_description_languages=["english"],
        ))
        for fragment in ("engineer", "intern", "remote", "english"):
            assert fragment not in url

    def test_parameter_order_is_fixed(self) -> None:
        url = build_url(
            _criteria(workplace_modes=["hybrid", "remote"], date_posted="past-week"),
            geo_id="42",
            start=7,
        )
        keys = [k for k, _ in parse_qsl(urlparse(url).query)]
        assert keys == ["keywords", "location", "start", "f_WT", "f_AL", "f_TPR", "geoId"]

    def test_deterministic(self) -> None:
        a = build_url(_criteria(workplace_modes=["remote", "on-site"]), geo_id="1")
        b = build_url(_criteria(workplace_modes=["on-site", "remote"]), geo_id="1")
        assert a == b


# ---------------------------------------------------------------------------
# TestWithStart
# ---------------------------------------------------------------------------


class TestWithStart:
    def test_only_start_changes(self) -> None:
        base = build_url(_criteria(workplace_modes=["remote"]), geo_id="42")
        paged = with_start(base, 21)
        before, after = _parse(base), _parse(paged)
        assert after["start"] == ["21"]
        assert {k: v for k, v in after.items() if k != "start"} == {
            k: v for k, v in before.items() if k != "start"
        }

    def test_start_position_preserved(self) -> None:
        paged = with_start(build_url(_criteria()), 7)
        keys = [k for k, _ in parse_qsl(urlparse(paged).query)]
        assert keys.index("start") == 2

    def test_adds_start_when_missing(self) -> None:
        paged = with_start(f"{SEARCH_BASE}?keywords=python", 14)
        assert _parse(paged)["start"] == ["14"]

    def test_empty_location_kept(self) -> None:
        paged = with_start(build_url(_criteria(location="")), 7)
        assert _parse(paged)["location"] == [""]


# ---------------------------------------------------------------------------
# TestMappingConstants
# ---------------------------------------------------------------------------


class TestMappingConstants:
    def test_workplace_codes(self) -> None:
        assert WORKPLACE_MODE_CODES == {
            WorkplaceMode.ON_SITE: 1,
            WorkplaceMode.REMOTE: 2,
            WorkplaceMode.HYBRID: 3,
        }

    def test_date_posted_has_no_token_for_none(self) -> None:
        assert DatePosted.NONE not in DATE_POSTED_TOKENS

    def test_workplace_codes_helper_empty(self) -> None:
        assert workplace_codes(frozenset()) == ""
