"""
Analysis pipeline - the entry point consumers use to enrich headlines and
derive sentiment and correlation signals from them.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from monitor.analysis.config import CORRELATION_TOPICS, load_correlation_topics
from monitor.analysis.correlation import CorrelationEngine
from monitor.analysis.enrichment import enrich
from monitor.analysis.keywords import AlertKeywordStore
from monitor.analysis.sentiment import analyze_sentiment
from monitor.analysis.types import (
    CorrelationResults,
    CorrelationSummary,
    EnrichedHeadline,
    HeadlineRecord,
    SentimentSummary,
)
from monitor.settings import Settings, global_settings

RawHeadline = HeadlineRecord | Mapping[str, Any]


class PipelineReport(BaseModel):
    """Output of a full pipeline run."""

    headlines: list[EnrichedHeadline] = Field(default_factory=list)
    sentiment: SentimentSummary | None = None
    correlations: CorrelationResults | None = None
    summary: CorrelationSummary

    @property
    def alerts(self) -> list[EnrichedHeadline]:
        return [h for h in self.headlines if h.is_alert]


class AnalysisPipeline:
    """
    Owns one CorrelationEngine and one AlertKeywordStore.

    Create one pipeline per process and pass it to whoever needs it; the
    engine's rolling topic history lives as long as the pipeline does.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        engine: CorrelationEngine | None = None,
        keyword_store: AlertKeywordStore | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.settings = settings or global_settings
        self.keyword_store = keyword_store or AlertKeywordStore()
        self.engine = engine or self._build_engine(clock)

    def _build_engine(self, clock: Callable[[], float] | None) -> CorrelationEngine:
        topics = CORRELATION_TOPICS
        if self.settings.correlation_topics_path:
            topics = load_correlation_topics(self.settings.correlation_topics_path)

        kwargs: dict[str, Any] = {
            "topics": topics,
            "history_retention_minutes": self.settings.history_retention_minutes,
            "momentum_window_minutes": self.settings.momentum_window_minutes,
        }
        if clock is not None:
            kwargs["clock"] = clock
        return CorrelationEngine(**kwargs)

    def enrich(self, item: RawHeadline) -> EnrichedHeadline:
        return enrich(
            item,
            keywords=self.keyword_store.active_keywords(),
            include_description=self.settings.enrich_with_description,
        )

    def enrich_all(self, items: Iterable[RawHeadline]) -> list[EnrichedHeadline]:
        return [self.enrich(item) for item in items]

    def analyze_sentiment(
        self, items: Sequence[RawHeadline], limit: int | None = None
    ) -> SentimentSummary | None:
        if limit is None:
            limit = self.settings.sentiment_limit
        return analyze_sentiment(items, limit=limit)

    def analyze_correlations(
        self, items: Sequence[RawHeadline]
    ) -> CorrelationResults | None:
        return self.engine.analyze(items)

    def get_correlation_summary(
        self, results: CorrelationResults | None
    ) -> CorrelationSummary:
        return self.engine.get_summary(results)

    def clear_correlation_history(self) -> None:
        self.engine.clear_history()
        logger.info("Correlation history cleared")

    def run(self, items: Sequence[RawHeadline]) -> PipelineReport:
        """Enrich every item, then run sentiment and correlation analysis."""
        headlines = self.enrich_all(items)
        sentiment = self.analyze_sentiment(headlines)
        correlations = self.analyze_correlations(headlines)
        summary = self.get_correlation_summary(correlations)

        logger.info(
            f"Pipeline run: {len(headlines)} headlines, "
            f"{sum(1 for h in headlines if h.is_alert)} alerts, {summary.status}"
        )
        return PipelineReport(
            headlines=headlines,
            sentiment=sentiment,
            correlations=correlations,
            summary=summary,
        )
