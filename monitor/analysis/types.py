"""
Analysis input and result types using Pydantic models.
"""

import math
import time
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SentimentType = Literal["positive", "negative", "neutral", "critical", "alarming"]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class HeadlineRecord(BaseModel):
    """
    Raw headline as delivered by a feed.

    Missing text fields become empty strings. A missing or non-numeric
    timestamp is replaced by the ingestion time, so upstream feeds with
    broken dates still sort and bucket as "now".
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    description: str | None = None
    link: str = ""
    source: str = ""
    timestamp: int = Field(default_factory=now_ms)
    category: str = ""

    @field_validator("id", "title", "link", "source", "category", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return value if isinstance(value, str) else str(value)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> int:
        if isinstance(value, bool):
            return now_ms()
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return now_ms()
        if isinstance(value, (int, float)) and math.isfinite(value):
            return int(value)
        return now_ms()


class EnrichedHeadline(HeadlineRecord):
    """Headline with alert, region and topic tags attached."""

    is_alert: bool = False
    alert_keyword: str | None = None
    region: str | None = None
    topics: list[str] = Field(default_factory=list)


class HeadlineSentiment(BaseModel):
    """Sentiment classification of a single headline."""

    headline: EnrichedHeadline
    sentiment: SentimentType
    score: float = Field(ge=-1, le=1)
    keywords: list[str] = Field(default_factory=list, max_length=5)
    category: str = "General"


class SentimentDistribution(BaseModel):
    """Headline counts per sentiment tier."""

    positive: int = 0
    negative: int = 0
    neutral: int = 0
    critical: int = 0
    alarming: int = 0


class ThemeSentiment(BaseModel):
    """Aggregated sentiment of one geopolitical theme."""

    theme: str
    count: int
    sentiment: SentimentType


class SentimentSummary(BaseModel):
    """Sentiment aggregate over the most recent headlines."""

    overall: SentimentType
    overall_score: float
    distribution: SentimentDistribution
    top_headlines: list[HeadlineSentiment] = Field(default_factory=list)
    themes: list[ThemeSentiment] = Field(default_factory=list)


class HeadlineRef(BaseModel):
    """Reference to a news headline."""

    title: str
    link: str
    source: str


class EmergingPattern(BaseModel):
    """Detected emerging pattern across news items."""

    id: str
    name: str
    category: str
    count: int
    level: Literal["high", "elevated", "emerging"]
    sources: list[str]
    headlines: list[HeadlineRef] = Field(default_factory=list)


class MomentumSignal(BaseModel):
    """Topic momentum signal (rising/falling trends)."""

    id: str
    name: str
    category: str
    current: int
    delta: int
    momentum: Literal["surging", "rising", "stable"]
    headlines: list[HeadlineRef] = Field(default_factory=list)


class CrossSourceCorrelation(BaseModel):
    """Cross-source correlation (same topic across multiple sources)."""

    id: str
    name: str
    category: str
    source_count: int
    sources: list[str]
    level: Literal["high", "elevated", "emerging"]
    headlines: list[HeadlineRef] = Field(default_factory=list)


class PredictiveSignal(BaseModel):
    """Predictive signal based on combined metrics."""

    id: str
    name: str
    category: str
    score: int
    confidence: int
    prediction: str
    level: Literal["high", "medium", "low"]
    headlines: list[HeadlineRef] = Field(default_factory=list)


class CorrelationResults(BaseModel):
    """Complete correlation analysis results."""

    emerging_patterns: list[EmergingPattern] = Field(default_factory=list)
    momentum_signals: list[MomentumSignal] = Field(default_factory=list)
    cross_source_correlations: list[CrossSourceCorrelation] = Field(
        default_factory=list
    )
    predictive_signals: list[PredictiveSignal] = Field(default_factory=list)

    @property
    def total_signals(self) -> int:
        return (
            len(self.emerging_patterns)
            + len(self.momentum_signals)
            + len(self.predictive_signals)
        )

    @property
    def status(self) -> str:
        if self.total_signals == 0:
            return "MONITORING"
        return f"{self.total_signals} SIGNALS"


class CorrelationSummary(BaseModel):
    """Summary of correlation analysis."""

    total_signals: int
    status: str
    top_patterns: list[str] = Field(default_factory=list)
    top_momentum: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_signals": self.total_signals,
            "status": self.status,
            "top_patterns": self.top_patterns,
            "top_momentum": self.top_momentum,
        }
