"""Tests for the built-in taxonomies and topic file loading."""

import json
from pathlib import Path

import pytest

from monitor.analysis.config import (
    ALERT_KEYWORDS,
    CORRELATION_TOPICS,
    GEOPOLITICAL_THEMES,
    get_topic_by_id,
    load_correlation_topics,
)
from monitor.exceptions import TaxonomyError


def write_topics(tmp_path: Path, topics) -> Path:
    path = tmp_path / "topics.json"
    path.write_text(json.dumps({"topics": topics}))
    return path


def test_builtin_tables_are_well_formed() -> None:
    ids = [t.id for t in CORRELATION_TOPICS]
    assert len(ids) == len(set(ids))
    assert all(t.patterns for t in CORRELATION_TOPICS)
    assert all(k == k.lower() for k in ALERT_KEYWORDS)
    assert len(GEOPOLITICAL_THEMES) == 12


def test_get_topic_by_id() -> None:
    topic = get_topic_by_id("russia-ukraine")
    assert topic is not None
    assert topic.category == "Conflict"
    assert get_topic_by_id("missing") is None


@pytest.mark.parametrize(
    "topic_id, text, expected",
    [
        ("ai-breakthrough", "Lab claims AGI milestone", True),
        ("ai-breakthrough", "Agitation grows in parliament", True),
        ("cybersecurity", "APT29 linked to intrusion", True),
        ("cybersecurity", "Firms adapt to new rules", True),
        ("russia-ukraine", "KYIV under curfew", True),
    ],
)
def test_topic_patterns(topic_id: str, text: str, expected: bool) -> None:
    assert get_topic_by_id(topic_id).matches(text) is expected


def test_load_correlation_topics_keeps_order(tmp_path: Path) -> None:
    path = write_topics(
        tmp_path,
        [
            {"id": "ports", "category": "Economic", "patterns": ["harbor", "port"]},
            {"id": "storms", "patterns": ["hurricane"]},
        ],
    )
    topics = load_correlation_topics(path)

    assert [t.id for t in topics] == ["ports", "storms"]
    assert topics[1].category == "General"
    assert topics[0].matches("HARBOR closed")


@pytest.mark.parametrize(
    "topics, fragment",
    [
        ([{"patterns": ["x"]}], "without an id"),
        (
            [{"id": "a", "patterns": ["x"]}, {"id": "a", "patterns": ["y"]}],
            "duplicate topic id 'a'",
        ),
        ([{"id": "a", "patterns": []}], "has no patterns"),
        ([{"id": "a", "patterns": ["("]}], "bad pattern in topic 'a'"),
        ("nope", "'topics' must be a list"),
    ],
)
def test_load_correlation_topics_rejects_bad_topics(
    tmp_path: Path, topics, fragment: str
) -> None:
    path = write_topics(tmp_path, topics)
    with pytest.raises(TaxonomyError) as exc_info:
        load_correlation_topics(path)
    assert fragment in str(exc_info.value)
    assert str(exc_info.value).startswith("Invalid taxonomy configuration")
    assert exc_info.value.source == str(path)


def test_load_correlation_topics_unreadable(tmp_path: Path) -> None:
    with pytest.raises(TaxonomyError):
        load_correlation_topics(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2")
    with pytest.raises(TaxonomyError):
        load_correlation_topics(bad)
