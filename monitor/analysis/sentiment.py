"""
Sentiment analysis - scores headlines for emotional tone and groups them by
geopolitical theme.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from monitor.analysis.config import (
    DEFAULT_THEME,
    GEOPOLITICAL_THEMES,
    SENTIMENT_KEYWORDS,
)
from monitor.analysis.enrichment import enrich
from monitor.analysis.types import (
    EnrichedHeadline,
    HeadlineRecord,
    HeadlineSentiment,
    SentimentDistribution,
    SentimentSummary,
    SentimentType,
    ThemeSentiment,
)

MAX_KEYWORDS = 5
MAX_THEMES = 6
DEFAULT_LIMIT = 20

SENTIMENT_SCORES: dict[SentimentType, float] = {
    "alarming": -1.0,
    "critical": -0.7,
    "negative": -0.4,
    "positive": 0.5,
    "neutral": 0.0,
}

SENTIMENT_COLORS: dict[SentimentType, str] = {
    "alarming": "#ff4444",
    "critical": "#ff8800",
    "negative": "#ffaa44",
    "positive": "#44cc66",
    "neutral": "#888888",
}

SENTIMENT_EMOJIS: dict[SentimentType, str] = {
    "alarming": "🔴",
    "critical": "🟠",
    "negative": "🟡",
    "positive": "🟢",
    "neutral": "⚪",
}


def score_to_sentiment(score: float) -> SentimentType:
    """Map an average score onto a sentiment tier."""
    if score <= -0.6:
        return "alarming"
    elif score <= -0.3:
        return "critical"
    elif score < -0.1:
        return "negative"
    elif score > 0.2:
        return "positive"
    return "neutral"


def _dominant_sentiment(counts: dict[str, int]) -> SentimentType:
    if counts["alarming"] >= 1:
        return "alarming"
    if counts["critical"] >= 1:
        return "critical"
    if counts["negative"] > counts["positive"]:
        return "negative"
    if counts["positive"] > counts["negative"]:
        return "positive"
    return "neutral"


def detect_theme(text: str) -> str:
    """Return the first geopolitical theme mentioned in text."""
    lower_text = (text or "").lower()
    for theme, keywords in GEOPOLITICAL_THEMES:
        if any(k in lower_text for k in keywords):
            return theme
    return DEFAULT_THEME


def analyze_headline(
    item: EnrichedHeadline | HeadlineRecord | Mapping[str, Any],
) -> HeadlineSentiment:
    """
    Analyze sentiment of a single headline.

    Alarming terms dominate everything, then critical terms; otherwise the
    larger of the negative and positive hit counts decides, ties are neutral.
    """
    headline = enrich(item)
    title = headline.title.lower()

    counts = {tier: 0 for tier, _ in SENTIMENT_KEYWORDS}
    found_keywords: list[str] = []
    for tier, keywords in SENTIMENT_KEYWORDS:
        for keyword in keywords:
            if keyword in title:
                counts[tier] += 1
                found_keywords.append(keyword)

    sentiment = _dominant_sentiment(counts)
    return HeadlineSentiment(
        headline=headline,
        sentiment=sentiment,
        score=SENTIMENT_SCORES[sentiment],
        keywords=found_keywords[:MAX_KEYWORDS],
        category=detect_theme(title),
    )


def analyze_sentiment(
    news: Sequence[EnrichedHeadline | HeadlineRecord | Mapping[str, Any]],
    limit: int = DEFAULT_LIMIT,
) -> SentimentSummary | None:
    """
    Analyze the most recent headlines and return a sentiment summary.

    Args:
        news: Headlines in any order
        limit: How many of the most recent headlines to score

    Returns:
        SentimentSummary or None if there are no headlines
    """
    if not news or limit <= 0:
        return None

    headlines = [enrich(item) for item in news]
    recent = sorted(headlines, key=lambda h: h.timestamp, reverse=True)[:limit]

    analyzed = [analyze_headline(h) for h in recent]

    distribution = SentimentDistribution()
    theme_scores: dict[str, list[float]] = {}
    total_score = 0.0
    for result in analyzed:
        setattr(
            distribution,
            result.sentiment,
            getattr(distribution, result.sentiment) + 1,
        )
        total_score += result.score
        theme_scores.setdefault(result.category, []).append(result.score)

    overall_score = total_score / len(analyzed)

    themes = sorted(
        (
            ThemeSentiment(
                theme=theme,
                count=len(scores),
                sentiment=score_to_sentiment(sum(scores) / len(scores)),
            )
            for theme, scores in theme_scores.items()
            if theme != DEFAULT_THEME
        ),
        key=lambda t: t.count,
        reverse=True,
    )[:MAX_THEMES]

    summary = SentimentSummary(
        overall=score_to_sentiment(overall_score),
        overall_score=overall_score,
        distribution=distribution,
        top_headlines=analyzed,
        themes=themes,
    )
    logger.info(
        f"Sentiment: {summary.overall} ({overall_score:.2f}) over "
        f"{len(analyzed)} headlines, {len(themes)} themes"
    )
    return summary


def get_sentiment_color(sentiment: SentimentType) -> str:
    """Display color for a sentiment tier."""
    return SENTIMENT_COLORS[sentiment]


def get_sentiment_emoji(sentiment: SentimentType) -> str:
    """Display emoji for a sentiment tier."""
    return SENTIMENT_EMOJIS[sentiment]
