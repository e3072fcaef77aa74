"""
Correlation engine - analyzes patterns across news items.

Detects:
- Emerging patterns (topics with 3+ mentions)
- Momentum signals (rising topic trends)
- Cross-source correlations (same topic across multiple sources)
- Predictive signals (combined score-based predictions)
"""

import math
import threading
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal

from loguru import logger

from monitor.analysis.config import CORRELATION_TOPICS, CorrelationTopic
from monitor.analysis.types import (
    CorrelationResults,
    CorrelationSummary,
    CrossSourceCorrelation,
    EmergingPattern,
    HeadlineRecord,
    HeadlineRef,
    MomentumSignal,
    PredictiveSignal,
)


def _field(item: HeadlineRecord | Mapping[str, Any], name: str) -> str:
    value = (
        item.get(name) if isinstance(item, Mapping) else getattr(item, name, None)
    )
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def generate_prediction(
    topic: CorrelationTopic, count: int, source_count: int, delta: int
) -> str:
    """
    Describe what a predictive signal suggests.

    Conflict, Economic, Technology and Policy topics get their own wording;
    every other category falls through the generic cascade, where the first
    satisfied threshold picks the sentence.
    """
    if count >= 10:
        mention_level = "explosive"
    elif count >= 7:
        mention_level = "rapid"
    elif count >= 4:
        mention_level = "growing"
    else:
        mention_level = "emerging"

    if source_count >= 6:
        source_level = "widespread"
    elif source_count >= 4:
        source_level = "broad"
    elif source_count >= 2:
        source_level = "multi-source"
    else:
        source_level = "focused"

    if delta >= 5:
        momentum_level = "accelerating"
    elif delta >= 3:
        momentum_level = "building"
    elif delta >= 1:
        momentum_level = "increasing"
    else:
        momentum_level = "stable"

    if topic.category == "Conflict":
        if delta >= 4 and source_count >= 4:
            return (
                f"{_capitalize(mention_level)} escalation with {source_level} "
                "coverage - expect major developments"
            )
        if count >= 8:
            return "Conflict narrative spreading rapidly across sources"
        return "Geopolitical tension building with increased reporting"

    if topic.category == "Economic":
        if count >= 8 and source_count >= 5:
            return (
                f"{mention_level} economic impact being reported by "
                f"{source_count}+ sources"
            )
        if delta >= 4:
            return (
                f"{_capitalize(momentum_level)} economic concern with "
                f"{mention_level} media attention"
            )
        return f"{source_level} economic coverage with {mention_level} trend"

    if topic.category == "Technology":
        if delta >= 5:
            return (
                f"Tech story {mention_level} with {source_level} adoption "
                "in news cycle"
            )
        if source_count >= 6:
            return (
                f"Major tech narrative forming - {source_count} independent "
                "sources covering"
            )
        return f"{mention_level} technology trend with {source_level} coverage"

    if topic.category == "Policy":
        if count >= 10:
            return (
                "Policy development dominating conversation across "
                f"{source_count} major sources"
            )
        if delta >= 4:
            return (
                f"{_capitalize(momentum_level)} policy impact with "
                f"{mention_level} reporting"
            )
        return (
            f"Policy narrative {mention_level} with focus from "
            f"{source_count} distinct sources"
        )

    if delta >= 5 and source_count >= 5:
        return (
            f"{mention_level} story {momentum_level} across "
            f"{source_level} sources"
        )
    if count >= 10 and source_count >= 6:
        return (
            f"Major narrative with {count} mentions from {source_count} "
            "independent sources"
        )
    if delta >= 4:
        return f"Rapidly {momentum_level} topic gaining attention across media"
    if source_count >= 5:
        return f"{source_level} consensus forming around this topic"
    if count >= 8:
        return f"{mention_level} topic with sustained media coverage"
    return f"{mention_level} pattern forming with {source_level} coverage"


class CorrelationEngine:
    """
    Analyzes patterns across news items to detect signals and trends.

    The engine owns a rolling per-minute history of topic counts. The first
    analysis in a wall-clock minute freezes that minute's snapshot; later
    calls in the same minute only read it.
    """

    HISTORY_RETENTION_MINUTES = 30
    MOMENTUM_WINDOW_MINUTES = 10
    MAX_HEADLINES = 5

    EMERGING_THRESHOLD = 3
    ELEVATED_THRESHOLD = 5
    HIGH_THRESHOLD = 8
    CROSS_SOURCE_THRESHOLD = 3
    CROSS_SOURCE_ELEVATED = 4
    CROSS_SOURCE_HIGH = 5
    PREDICTIVE_SCORE_THRESHOLD = 15

    def __init__(
        self,
        topics: Sequence[CorrelationTopic] = CORRELATION_TOPICS,
        clock: Callable[[], float] = time.time,
        history_retention_minutes: int | None = None,
        momentum_window_minutes: int | None = None,
    ):
        self.topics = tuple(topics)
        self._clock = clock
        if history_retention_minutes is None:
            history_retention_minutes = self.HISTORY_RETENTION_MINUTES
        if momentum_window_minutes is None:
            momentum_window_minutes = self.MOMENTUM_WINDOW_MINUTES
        self.history_retention_minutes = history_retention_minutes
        self.momentum_window_minutes = momentum_window_minutes
        # {minute_timestamp: {topic_id: count}}
        self._topic_history: dict[int, dict[str, int]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _format_topic_name(topic_id: str) -> str:
        return topic_id.replace("-", " ").title()

    def _current_minute(self) -> int:
        return int(self._clock() * 1000) // 60000

    def _cleanup_history(self, current_minute: int) -> None:
        for key in [
            k
            for k in self._topic_history
            if current_minute - k > self.history_retention_minutes
        ]:
            del self._topic_history[key]

    def _record_history(self, current_minute: int, counts: dict[str, int]) -> bool:
        """Store the snapshot for this minute unless one already exists."""
        with self._lock:
            if current_minute in self._topic_history:
                return False
            self._topic_history[current_minute] = dict(counts)
            self._cleanup_history(current_minute)
        logger.debug(
            f"Correlation history: stored minute {current_minute} "
            f"({len(counts)} topics, {len(self._topic_history)} buckets)"
        )
        return True

    def _get_level(
        self, count: int, elevated: int, high: int
    ) -> Literal["high", "elevated", "emerging"]:
        if count >= high:
            return "high"
        elif count >= elevated:
            return "elevated"
        return "emerging"

    def _get_momentum(self, delta: int) -> Literal["surging", "rising", "stable"]:
        if delta >= 4:
            return "surging"
        elif delta >= 2:
            return "rising"
        return "stable"

    def analyze(
        self, news_items: Sequence[HeadlineRecord | Mapping[str, Any]]
    ) -> CorrelationResults | None:
        """
        Analyze news items for patterns and signals.

        Args:
            news_items: Headline records or dicts with 'title', 'link',
                'source' keys; missing fields count as empty

        Returns:
            CorrelationResults or None if no items
        """
        if not news_items:
            return None

        current_minute = self._current_minute()

        topic_counts: dict[str, int] = {}
        # dict keys keep source insertion order
        topic_sources: dict[str, dict[str, None]] = {}
        topic_headlines: dict[str, list[HeadlineRef]] = {}

        for item in news_items:
            title = _field(item, "title")
            source = _field(item, "source") or "Unknown"
            link = _field(item, "link")

            for topic in self.topics:
                if topic.matches(title):
                    topic_counts[topic.id] = topic_counts.get(topic.id, 0) + 1
                    topic_sources.setdefault(topic.id, {})[source] = None
                    headlines = topic_headlines.setdefault(topic.id, [])
                    if len(headlines) < self.MAX_HEADLINES:
                        headlines.append(
                            HeadlineRef(title=title, link=link, source=source)
                        )

        # Update history for momentum tracking
        self._record_history(current_minute, topic_counts)

        old_counts = self._topic_history.get(
            current_minute - self.momentum_window_minutes, {}
        )

        results = CorrelationResults()

        for topic in self.topics:
            count = topic_counts.get(topic.id, 0)
            sources = list(topic_sources.get(topic.id, {}))
            headlines = topic_headlines.get(topic.id, [])
            delta = count - old_counts.get(topic.id, 0)
            name = self._format_topic_name(topic.id)

            if count >= self.EMERGING_THRESHOLD:
                results.emerging_patterns.append(
                    EmergingPattern(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        count=count,
                        level=self._get_level(
                            count, self.ELEVATED_THRESHOLD, self.HIGH_THRESHOLD
                        ),
                        sources=sources,
                        headlines=headlines,
                    )
                )

            if delta >= 2 or (count >= 3 and delta >= 1):
                results.momentum_signals.append(
                    MomentumSignal(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        current=count,
                        delta=delta,
                        momentum=self._get_momentum(delta),
                        headlines=headlines,
                    )
                )

            if len(sources) >= self.CROSS_SOURCE_THRESHOLD:
                results.cross_source_correlations.append(
                    CrossSourceCorrelation(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        source_count=len(sources),
                        sources=sources,
                        level=self._get_level(
                            len(sources),
                            self.CROSS_SOURCE_ELEVATED,
                            self.CROSS_SOURCE_HIGH,
                        ),
                        headlines=headlines,
                    )
                )

            score = count * 2 + len(sources) * 3 + delta * 5
            if score >= self.PREDICTIVE_SCORE_THRESHOLD:
                confidence = min(95, _round_half_up(score * 1.5))
                results.predictive_signals.append(
                    PredictiveSignal(
                        id=topic.id,
                        name=name,
                        category=topic.category,
                        score=score,
                        confidence=confidence,
                        prediction=generate_prediction(
                            topic, count, len(sources), delta
                        ),
                        level="high"
                        if confidence >= 70
                        else "medium"
                        if confidence >= 50
                        else "low",
                        headlines=headlines,
                    )
                )

        results.emerging_patterns.sort(key=lambda x: x.count, reverse=True)
        results.momentum_signals.sort(key=lambda x: x.delta, reverse=True)
        results.cross_source_correlations.sort(
            key=lambda x: x.source_count, reverse=True
        )
        results.predictive_signals.sort(key=lambda x: x.score, reverse=True)

        logger.info(
            f"Correlation: {len(results.emerging_patterns)} patterns, "
            f"{len(results.momentum_signals)} momentum, "
            f"{len(results.cross_source_correlations)} cross-source, "
            f"{len(results.predictive_signals)} predictive"
        )
        return results

    def get_summary(self, results: CorrelationResults | None) -> CorrelationSummary:
        if not results:
            return CorrelationSummary(total_signals=0, status="NO DATA")
        return CorrelationSummary(
            total_signals=results.total_signals,
            status=results.status,
            top_patterns=[p.name for p in results.emerging_patterns[:3]],
            top_momentum=[m.name for m in results.momentum_signals[:3]],
        )

    def get_history(self, minute: int) -> dict[str, int] | None:
        """Copy of the stored counts for a minute bucket, if any."""
        counts = self._topic_history.get(minute)
        return dict(counts) if counts is not None else None

    @property
    def history_minutes(self) -> list[int]:
        with self._lock:
            minutes = list(self._topic_history)
        return sorted(minutes)

    @property
    def current_minute(self) -> int:
        return self._current_minute()

    def clear_history(self) -> None:
        with self._lock:
            self._topic_history.clear()
