"""
Feed record normalisation.

Turns already-fetched RSS documents, GDELT article lists and loosely shaped
dicts into HeadlineRecord objects. Nothing here performs network I/O.
"""

import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import feedparser
from bs4 import BeautifulSoup
from dateutil import parser as date_parser
from loguru import logger

from monitor.analysis.types import HeadlineRecord, now_ms

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_GDELT_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})T(\d{2})(\d{2})(\d{2})Z$")


def hash_code(text: str) -> str:
    """
    32-bit string hash (31 * h + unit over UTF-16 code units), rendered in
    base 36 from its absolute value. Stable across runs and platforms.
    """
    data = text.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    value = abs(value)

    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _to_epoch_ms(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def parse_date(date_str: str | None) -> int:
    """Parse a free-form date into epoch ms; unparseable dates become now."""
    if not date_str:
        return now_ms()
    try:
        return _to_epoch_ms(date_parser.parse(date_str))
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable date '{date_str}': {e}")
        return now_ms()


def parse_gdelt_date(date_str: str | None) -> int:
    """Parse GDELT's compact ``20251202T224500Z`` format into epoch ms."""
    if not date_str:
        return now_ms()
    match = _GDELT_DATE.match(date_str)
    if match:
        year, month, day, hour, minute, second = (int(g) for g in match.groups())
        try:
            return _to_epoch_ms(
                datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
            )
        except ValueError:
            return now_ms()
    return parse_date(date_str)


def clean_html_content(html: str) -> str:
    """Strip markup and collapse whitespace."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for script in soup(["script", "style"]):
        script.decompose()
    return " ".join(soup.get_text(separator=" ").split())


def _normalize_link(link: str) -> str:
    return link if link.startswith("http") else f"https://{link}"


def parse_rss_document(
    content: str | bytes, source_name: str, category: str
) -> list[HeadlineRecord]:
    """
    Parse an RSS/Atom document into headline records.

    Entries without a title or link are skipped.
    """
    if isinstance(content, str):
        # feedparser treats a str that looks like a URL or path as a location
        content = content.encode("utf-8")
    parsed = feedparser.parse(content)
    if parsed.bozo:
        logger.warning(
            f"Feed parsing warning for {source_name}: {parsed.bozo_exception}"
        )

    records: list[HeadlineRecord] = []
    for entry in parsed.entries:
        title = (entry.get("title") or "").strip()
        link = (entry.get("link") or "").strip()
        if not title or not link:
            continue

        try:
            description = clean_html_content(
                entry.get("description") or entry.get("summary") or ""
            )
            published = entry.get("published") or entry.get("updated")
            records.append(
                HeadlineRecord(
                    id=f"rss-{category}-{hash_code(link)}-{len(records)}",
                    title=title,
                    description=description or None,
                    link=_normalize_link(link),
                    source=source_name,
                    timestamp=parse_date(published),
                    category=category,
                )
            )
        except ValueError as e:
            logger.warning(f"Failed to parse entry from {source_name}: {e}")
            continue

    logger.info(f"Parsed {len(records)} headlines from {source_name}")
    return records


def parse_gdelt_articles(
    payload: Mapping[str, Any] | None, category: str, default_source: str = "News"
) -> list[HeadlineRecord]:
    """Convert a GDELT ``artlist`` JSON payload into headline records."""
    articles = (payload or {}).get("articles") or []

    records: list[HeadlineRecord] = []
    for index, article in enumerate(articles):
        if not isinstance(article, Mapping):
            logger.warning(f"Skipping malformed GDELT article at {index}")
            continue
        url = article.get("url") or ""
        records.append(
            HeadlineRecord(
                id=f"gdelt-{category}-{hash_code(url)}-{index}",
                title=article.get("title") or "",
                link=url,
                source=article.get("domain") or default_source or "Unknown",
                timestamp=parse_gdelt_date(article.get("seendate")),
                category=category,
            )
        )
    return records


def to_headline(raw: Mapping[str, Any]) -> HeadlineRecord:
    """
    Build a HeadlineRecord from a loosely shaped dict.

    Accepts the common aliases used by feed stores: ``url`` for link,
    ``summary`` for description, ``feed_name`` for source, and
    ``published``/``pubDate`` (datetime or string) when no numeric
    ``timestamp`` is present.
    """
    timestamp: Any = raw.get("timestamp")
    if timestamp is None:
        published = raw.get("published") or raw.get("pubDate")
        if isinstance(published, datetime):
            timestamp = _to_epoch_ms(published)
        elif isinstance(published, str):
            timestamp = parse_date(published)

    link = raw.get("link") or raw.get("url") or ""
    return HeadlineRecord(
        id=raw.get("id") or (hash_code(link) if link else ""),
        title=raw.get("title"),
        description=raw.get("description") or raw.get("summary"),
        link=link,
        source=raw.get("source") or raw.get("feed_name"),
        timestamp=timestamp,
        category=raw.get("category"),
    )
