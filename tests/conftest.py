"""Shared fixtures for analysis tests."""

from __future__ import annotations

import pytest

from monitor.analysis.config import CorrelationTopic
from monitor.analysis.correlation import CorrelationEngine

# 2023-11-14T22:12:00Z, aligned to a minute boundary
BASE_SECONDS = 1_699_999_920.0


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: float = BASE_SECONDS) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += minutes * 60


def make_item(
    title: str,
    source: str = "Wire",
    link: str | None = None,
    timestamp: int | None = 1_700_000_000_000,
    **extra,
) -> dict:
    item = {
        "id": f"item-{abs(hash((title, source))) % 10_000}",
        "title": title,
        "link": link if link is not None else f"https://news.test/{len(title)}",
        "source": source,
        "timestamp": timestamp,
        "category": "world",
    }
    item.update(extra)
    return item


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def strike_topic() -> CorrelationTopic:
    return CorrelationTopic.from_strings("strikes", [r"strike|missile"], "Conflict")


@pytest.fixture
def engine(clock: FakeClock, strike_topic: CorrelationTopic) -> CorrelationEngine:
    return CorrelationEngine(topics=[strike_topic], clock=clock)
