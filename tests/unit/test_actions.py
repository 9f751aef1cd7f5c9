"""Tests for pacing delays between browser steps."""

import asyncio
from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest

from joblinks.browser.actions import PAGE_DELAY_FLOOR, page_delay, random_sleep


@pytest.fixture
def sleep() -> Iterator[AsyncMock]:
    with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


class TestRandomSleep:
    async def test_sleeps_the_returned_duration(self, sleep: AsyncMock) -> None:
        duration = await random_sleep(0.2, 0.4)
        assert 0.2 <= duration <= 0.4
        sleep.assert_awaited_once_with(duration)

    @pytest.mark.parametrize(
        ("min_s", "max_s", "expected"),
        [
            (1.5, 1.5, 1.5),   # empty range
            (3.0, 1.0, 3.0),   # inverted range collapses to the lower bound
            (-2.0, -1.0, 0.0),  # negative bounds count as zero
        ],
    )
    async def test_degenerate_ranges(
        self, sleep: AsyncMock, min_s: float, max_s: float, expected: float,
    ) -> None:
        assert await random_sleep(min_s, max_s) == expected
        sleep.assert_awaited_once_with(expected)


class TestPageDelay:
    async def test_defaults_to_two_seconds(self, sleep: AsyncMock) -> None:
        assert PAGE_DELAY_FLOOR == 2.0
        assert await page_delay() == 2.0
        sleep.assert_awaited_once_with(2.0)

    async def test_longer_delay_is_kept_exactly(self, sleep: AsyncMock) -> None:
        assert [await page_delay(3.5) for _ in range(3)] == [3.5, 3.5, 3.5]

    @pytest.mark.parametrize("requested", [0.0, 0.5, 1.99])
    async def test_never_shorter_than_floor(self, sleep: AsyncMock, requested: float) -> None:
        assert await page_delay(requested) == PAGE_DELAY_FLOOR
        sleep.assert_awaited_once_with(PAGE_DELAY_FLOOR)

    async def test_logs_wait(self, sleep: AsyncMock, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("DEBUG", logger="joblinks.browser.actions")
        await page_delay(2.5)
        assert "Waiting 2.5s before next page" in caplog.text
