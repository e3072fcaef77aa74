"""
Per-item enrichment - alert, region and topic tagging for headlines.

All matching is case-insensitive substring containment. It is not word
boundary aware, so short keywords such as "us" or "eu" also hit inside
longer words ("bonus", "neutral"). Callers rely on the current hit set.
"""

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from monitor.analysis.config import (
    ALERT_KEYWORDS,
    REGION_KEYWORDS,
    TOPIC_KEYWORDS,
)
from monitor.analysis.types import EnrichedHeadline, HeadlineRecord


class AlertMatch(NamedTuple):
    is_alert: bool
    keyword: str | None = None


def contains_alert_keyword(
    text: str, keywords: Iterable[str] | None = None
) -> AlertMatch:
    """Check if text contains alert keywords; the first listed hit wins."""
    lower_text = (text or "").lower()
    for keyword in ALERT_KEYWORDS if keywords is None else keywords:
        if keyword and keyword in lower_text:
            return AlertMatch(True, keyword)
    return AlertMatch(False)


def detect_region(text: str) -> str | None:
    """Detect region from text."""
    lower_text = (text or "").lower()
    for region, keywords in REGION_KEYWORDS:
        if any(k in lower_text for k in keywords):
            return region
    return None


def detect_topics(text: str) -> list[str]:
    """Detect topics from text."""
    lower_text = (text or "").lower()
    detected = []
    for topic, keywords in TOPIC_KEYWORDS:
        if any(k in lower_text for k in keywords):
            detected.append(topic)
    return detected


def as_record(item: HeadlineRecord | Mapping[str, Any]) -> HeadlineRecord:
    """Coerce a raw feed mapping into a HeadlineRecord."""
    if isinstance(item, HeadlineRecord):
        return item
    return HeadlineRecord.model_validate(dict(item))


def enrich(
    item: HeadlineRecord | Mapping[str, Any],
    keywords: Iterable[str] | None = None,
    include_description: bool = False,
) -> EnrichedHeadline:
    """
    Tag a headline with alert, region and topic information.

    Args:
        item: Headline record or raw mapping with at least a 'title'
        keywords: Alert keywords to use instead of ALERT_KEYWORDS
        include_description: Match against title plus description

    Returns:
        A new EnrichedHeadline; the input is left untouched
    """
    if isinstance(item, EnrichedHeadline):
        return item

    record = as_record(item)
    text = record.title
    if include_description and record.description:
        text = f"{text} {record.description}"

    alert = contains_alert_keyword(text, keywords)
    return EnrichedHeadline(
        **record.model_dump(),
        is_alert=alert.is_alert,
        alert_keyword=alert.keyword,
        region=detect_region(text),
        topics=detect_topics(text),
    )
