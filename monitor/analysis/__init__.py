"""
Headline analytics: enrichment, sentiment and cross-item correlation.
"""

from monitor.analysis.types import (
    CorrelationResults,
    CorrelationSummary,
    CrossSourceCorrelation,
    EmergingPattern,
    EnrichedHeadline,
    HeadlineRecord,
    HeadlineRef,
    HeadlineSentiment,
    MomentumSignal,
    PredictiveSignal,
    SentimentDistribution,
    SentimentSummary,
    SentimentType,
    ThemeSentiment,
)
from monitor.analysis.correlation import CorrelationEngine, generate_prediction
from monitor.analysis.enrichment import (
    AlertMatch,
    contains_alert_keyword,
    detect_region,
    detect_topics,
    enrich,
)
from monitor.analysis.keywords import AlertKeywordStore
from monitor.analysis.sentiment import (
    analyze_headline,
    analyze_sentiment,
    get_sentiment_color,
    get_sentiment_emoji,
    score_to_sentiment,
)
from monitor.analysis.config import (
    ALERT_KEYWORDS,
    CORRELATION_TOPICS,
    GEOPOLITICAL_THEMES,
    REGION_KEYWORDS,
    SENTIMENT_KEYWORDS,
    TOPIC_KEYWORDS,
    CorrelationTopic,
    load_correlation_topics,
)

__all__ = [
    # Types
    "HeadlineRecord",
    "EnrichedHeadline",
    "HeadlineSentiment",
    "SentimentDistribution",
    "SentimentSummary",
    "SentimentType",
    "ThemeSentiment",
    "CorrelationResults",
    "CorrelationSummary",
    "EmergingPattern",
    "MomentumSignal",
    "CrossSourceCorrelation",
    "PredictiveSignal",
    "HeadlineRef",
    # Enrichment
    "AlertMatch",
    "AlertKeywordStore",
    "contains_alert_keyword",
    "detect_region",
    "detect_topics",
    "enrich",
    # Sentiment
    "analyze_headline",
    "analyze_sentiment",
    "get_sentiment_color",
    "get_sentiment_emoji",
    "score_to_sentiment",
    # Engine
    "CorrelationEngine",
    "generate_prediction",
    # Config
    "ALERT_KEYWORDS",
    "CORRELATION_TOPICS",
    "GEOPOLITICAL_THEMES",
    "REGION_KEYWORDS",
    "SENTIMENT_KEYWORDS",
    "TOPIC_KEYWORDS",
    "CorrelationTopic",
    "load_correlation_topics",
]
