"""Tests for the correlation engine."""

from __future__ import annotations

import threading

import pytest

from monitor.analysis.config import CORRELATION_TOPICS, CorrelationTopic
from monitor.analysis.correlation import CorrelationEngine, generate_prediction
from tests.conftest import FakeClock, make_item


def strike_items(count: int, sources: list[str] | None = None) -> list[dict]:
    sources = sources or ["Wire"]
    return [
        make_item(f"Missile strike number {i}", source=sources[i % len(sources)])
        for i in range(count)
    ]


def test_empty_input_returns_none(engine: CorrelationEngine) -> None:
    assert engine.analyze([]) is None
    assert engine.history_minutes == []


def test_end_to_end_strike_scenario(engine: CorrelationEngine) -> None:
    news = [
        make_item("Russia launches missile strike on Kyiv", source="A"),
        make_item("Missile strike kills dozens in Kyiv", source="B"),
        make_item("Ukraine reports new Russian strikes", source="C"),
    ]
    results = engine.analyze(news)

    assert results is not None
    [pattern] = results.emerging_patterns
    assert pattern.id == "strikes"
    assert pattern.name == "Strikes"
    assert pattern.count == 3
    assert pattern.level == "emerging"
    assert pattern.sources == ["A", "B", "C"]
    assert [h.source for h in pattern.headlines] == ["A", "B", "C"]

    [cross] = results.cross_source_correlations
    assert cross.source_count == 3
    assert cross.level == "emerging"

    [momentum] = results.momentum_signals
    assert momentum.delta == 3
    assert momentum.momentum == "rising"

    [prediction] = results.predictive_signals
    assert prediction.score == 30
    assert prediction.confidence == 45
    assert prediction.level == "low"
    assert prediction.prediction == (
        "Geopolitical tension building with increased reporting"
    )

    summary = engine.get_summary(results)
    assert summary.total_signals == 3
    assert summary.status == "3 SIGNALS"


def test_emerging_levels(clock: FakeClock, strike_topic: CorrelationTopic) -> None:
    engine = CorrelationEngine(topics=[strike_topic], clock=clock)
    assert engine.analyze(strike_items(3)).emerging_patterns[0].level == "emerging"
    assert engine.analyze(strike_items(5)).emerging_patterns[0].level == "elevated"
    assert engine.analyze(strike_items(8)).emerging_patterns[0].level == "high"


def test_below_threshold_is_not_emerging(engine: CorrelationEngine) -> None:
    results = engine.analyze(strike_items(2))
    assert results is not None
    assert results.emerging_patterns == []
    # delta of 2 from an empty history still counts as momentum
    assert results.momentum_signals[0].momentum == "rising"


def test_headline_samples_capped_at_five(engine: CorrelationEngine) -> None:
    results = engine.analyze(strike_items(9))
    pattern = results.emerging_patterns[0]
    assert pattern.count == 9
    assert [h.title for h in pattern.headlines] == [
        f"Missile strike number {i}" for i in range(5)
    ]


def test_same_minute_snapshot_is_frozen(
    engine: CorrelationEngine, clock: FakeClock
) -> None:
    first = engine.analyze(strike_items(5))
    second = engine.analyze(strike_items(10))

    assert engine.get_history(engine.current_minute) == {"strikes": 5}
    assert first.emerging_patterns[0].count == 5
    assert second.emerging_patterns[0].count == 10


def test_momentum_against_ten_minute_old_bucket(
    engine: CorrelationEngine, clock: FakeClock
) -> None:
    engine.analyze(strike_items(2))
    clock.advance(10)
    results = engine.analyze(strike_items(6, sources=["A", "B", "C", "D"]))

    [momentum] = results.momentum_signals
    assert momentum.current == 6
    assert momentum.delta == 4
    assert momentum.momentum == "surging"
    assert results.emerging_patterns[0].level == "elevated"
    assert results.cross_source_correlations[0].level == "elevated"


def test_no_momentum_without_growth(
    engine: CorrelationEngine, clock: FakeClock
) -> None:
    engine.analyze(strike_items(3))
    clock.advance(10)
    results = engine.analyze(strike_items(3))
    assert results.momentum_signals == []
    assert results.emerging_patterns[0].count == 3


def test_single_step_momentum_needs_three_mentions(
    engine: CorrelationEngine, clock: FakeClock
) -> None:
    engine.analyze(strike_items(2))
    clock.advance(10)
    results = engine.analyze(strike_items(3))
    [momentum] = results.momentum_signals
    assert momentum.delta == 1
    assert momentum.momentum == "stable"


def test_clear_history_resets_delta(
    engine: CorrelationEngine, clock: FakeClock
) -> None:
    engine.analyze(strike_items(3))
    clock.advance(10)
    engine.clear_history()
    results = engine.analyze(strike_items(3))
    assert results.momentum_signals[0].delta == 3
    assert engine.history_minutes == [engine.current_minute]


def test_history_retention(engine: CorrelationEngine, clock: FakeClock) -> None:
    engine.analyze(strike_items(1))
    start = engine.current_minute

    clock.advance(30)
    engine.analyze(strike_items(1))
    assert engine.history_minutes == [start, start + 30]

    clock.advance(1)
    engine.analyze(strike_items(1))
    assert engine.history_minutes == [start + 30, start + 31]


def test_results_sorted_by_metric(clock: FakeClock) -> None:
    topics = [
        CorrelationTopic.from_strings("alpha", [r"alpha"], "Other"),
        CorrelationTopic.from_strings("beta", [r"beta"], "Other"),
    ]
    engine = CorrelationEngine(topics=topics, clock=clock)
    news = [make_item("alpha story", source=f"S{i}") for i in range(3)]
    news += [make_item("beta story", source=f"S{i}") for i in range(5)]

    results = engine.analyze(news)

    assert [p.id for p in results.emerging_patterns] == ["beta", "alpha"]
    assert [m.id for m in results.momentum_signals] == ["beta", "alpha"]
    assert [c.id for c in results.cross_source_correlations] == ["beta", "alpha"]
    assert [c.level for c in results.cross_source_correlations] == [
        "high",
        "emerging",
    ]
    assert [s.id for s in results.predictive_signals] == ["beta", "alpha"]


def test_confidence_rounds_half_up(clock: FakeClock) -> None:
    topic = CorrelationTopic.from_strings("alpha", [r"alpha"], "Other")
    engine = CorrelationEngine(topics=[topic], clock=clock)
    # count 1, one source, delta 1 -> 2 + 3 + 5 = 10, below threshold
    assert engine.analyze([make_item("alpha")]).predictive_signals == []

    clock.advance(10)
    # count 3, one source, delta 2 -> 6 + 3 + 10 = 19 -> 28.5 -> 29
    results = engine.analyze([make_item("alpha")] * 3)
    [signal] = results.predictive_signals
    assert signal.score == 19
    assert signal.confidence == 29
    assert signal.level == "low"


def test_confidence_capped(engine: CorrelationEngine) -> None:
    news = strike_items(10, sources=["A", "B", "C", "D", "E", "F"])
    [signal] = engine.analyze(news).predictive_signals
    assert signal.score == 10 * 2 + 6 * 3 + 10 * 5
    assert signal.confidence == 95
    assert signal.level == "high"


def test_malformed_items_are_tolerated(engine: CorrelationEngine) -> None:
    news = [
        {},
        {"title": None, "source": None},
        {"title": "Missile strike reported", "source": None},
        {"title": "Second missile strike", "link": None},
        {"title": "Third strike"},
    ]
    results = engine.analyze(news)
    pattern = results.emerging_patterns[0]
    assert pattern.count == 3
    assert pattern.sources == ["Unknown"]
    assert pattern.headlines[1].link == ""


def test_accepts_headline_records(engine: CorrelationEngine) -> None:
    from monitor.analysis.enrichment import enrich

    results = engine.analyze([enrich(item) for item in strike_items(3)])
    assert results.emerging_patterns[0].count == 3


def test_summary_states(engine: CorrelationEngine) -> None:
    assert engine.get_summary(None).status == "NO DATA"
    quiet = engine.analyze([make_item("Nothing to see here")])
    summary = engine.get_summary(quiet)
    assert summary.total_signals == 0
    assert summary.status == "MONITORING"
    assert summary.to_dict()["top_patterns"] == []


def test_default_topics_detect_ukraine_coverage(clock: FakeClock) -> None:
    engine = CorrelationEngine(clock=clock)
    assert engine.topics == CORRELATION_TOPICS
    news = [
        make_item("Zelensky visits front line", source="A"),
        make_item("Kyiv braces for winter", source="B"),
        make_item("Ukraine grain deal extended", source="C"),
    ]
    results = engine.analyze(news)
    ids = [p.id for p in results.emerging_patterns]
    assert "russia-ukraine" in ids


def test_concurrent_calls_store_one_snapshot(
    engine: CorrelationEngine,
) -> None:
    barrier = threading.Barrier(8)
    sizes = list(range(1, 9))

    def worker(size: int) -> None:
        barrier.wait()
        engine.analyze(strike_items(size))

    threads = [threading.Thread(target=worker, args=(n,)) for n in sizes]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(engine.history_minutes) == 1
    stored = engine.get_history(engine.current_minute)
    assert stored["strikes"] in sizes


def _topic(category: str) -> CorrelationTopic:
    return CorrelationTopic.from_strings("t", [r"t"], category)


@pytest.mark.parametrize(
    "category, count, sources, delta, expected",
    [
        (
            "Conflict",
            6,
            4,
            4,
            "Growing escalation with broad coverage - expect major developments",
        ),
        ("Conflict", 8, 2, 0, "Conflict narrative spreading rapidly across sources"),
        (
            "Economic",
            8,
            5,
            0,
            "rapid economic impact being reported by 5+ sources",
        ),
        (
            "Economic",
            4,
            2,
            4,
            "Building economic concern with growing media attention",
        ),
        ("Economic", 3, 3, 0, "multi-source economic coverage with emerging trend"),
        (
            "Technology",
            5,
            1,
            5,
            "Tech story growing with focused adoption in news cycle",
        ),
        (
            "Technology",
            3,
            6,
            0,
            "Major tech narrative forming - 6 independent sources covering",
        ),
        (
            "Policy",
            10,
            3,
            0,
            "Policy development dominating conversation across 3 major sources",
        ),
        ("Policy", 4, 2, 4, "Building policy impact with growing reporting"),
        ("Other", 7, 5, 5, "rapid story accelerating across broad sources"),
        (
            "Other",
            10,
            6,
            0,
            "Major narrative with 10 mentions from 6 independent sources",
        ),
        ("Other", 4, 2, 4, "Rapidly building topic gaining attention across media"),
        ("Other", 3, 5, 0, "broad consensus forming around this topic"),
        ("Other", 8, 3, 0, "rapid topic with sustained media coverage"),
        ("Other", 3, 3, 1, "emerging pattern forming with multi-source coverage"),
    ],
)
def test_prediction_branch_selection(
    category: str, count: int, sources: int, delta: int, expected: str
) -> None:
    assert generate_prediction(_topic(category), count, sources, delta) == expected


def test_zero_windows_are_kept(
    clock: FakeClock, strike_topic: CorrelationTopic
) -> None:
    engine = CorrelationEngine(
        topics=[strike_topic],
        clock=clock,
        history_retention_minutes=0,
        momentum_window_minutes=0,
    )
    assert engine.history_retention_minutes == 0
    assert engine.momentum_window_minutes == 0

    # a zero window compares against this minute's own snapshot
    results = engine.analyze(strike_items(3))
    assert results.momentum_signals == []

    clock.advance(1)
    engine.analyze(strike_items(3))
    assert engine.history_minutes == [engine.current_minute]


def test_history_minutes_waits_for_writers(engine: CorrelationEngine) -> None:
    engine.analyze(strike_items(1))
    seen: list[list[int]] = []
    reader = threading.Thread(target=lambda: seen.append(engine.history_minutes))

    with engine._lock:
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()

    reader.join()
    assert seen == [[engine.current_minute]]
