"""
Analysis configuration - alert keywords, taxonomies, and correlation topics.

Every table whose iteration order decides a first-match-wins tie-break is an
ordered tuple of ``(key, keywords)`` pairs. Keep the order as listed.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from monitor.exceptions import TaxonomyError

KeywordTable = tuple[tuple[str, tuple[str, ...]], ...]


# Alert keywords for high-priority detection (first listed match wins)
ALERT_KEYWORDS: tuple[str, ...] = (
    "war",
    "invasion",
    "military",
    "nuclear",
    "sanctions",
    "missile",
    "attack",
    "troops",
    "conflict",
    "strike",
    "bomb",
    "casualties",
    "ceasefire",
    "treaty",
    "nato",
    "coup",
    "martial law",
    "emergency",
    "assassination",
    "terrorist",
    "hostage",
    "evacuation",
)

# Region keyword mapping
REGION_KEYWORDS: KeywordTable = (
    (
        "EUROPE",
        (
            "nato",
            "eu",
            "european",
            "ukraine",
            "russia",
            "germany",
            "france",
            "uk",
            "britain",
            "poland",
        ),
    ),
    (
        "MENA",
        (
            "iran",
            "israel",
            "saudi",
            "syria",
            "iraq",
            "gaza",
            "lebanon",
            "yemen",
            "houthi",
            "middle east",
        ),
    ),
    (
        "APAC",
        (
            "china",
            "taiwan",
            "japan",
            "korea",
            "indo-pacific",
            "south china sea",
            "asean",
            "philippines",
        ),
    ),
    (
        "AMERICAS",
        ("us", "america", "canada", "mexico", "brazil", "venezuela", "latin"),
    ),
    ("AFRICA", ("africa", "sahel", "niger", "sudan", "ethiopia", "somalia")),
)

# Topic keyword mapping
TOPIC_KEYWORDS: KeywordTable = (
    (
        "CYBER",
        ("cyber", "hack", "ransomware", "malware", "breach", "apt", "vulnerability"),
    ),
    (
        "NUCLEAR",
        ("nuclear", "icbm", "warhead", "nonproliferation", "uranium", "plutonium"),
    ),
    (
        "CONFLICT",
        (
            "war",
            "military",
            "troops",
            "invasion",
            "strike",
            "missile",
            "combat",
            "offensive",
        ),
    ),
    ("INTEL", ("intelligence", "espionage", "spy", "cia", "mossad", "fsb", "covert")),
    (
        "DEFENSE",
        ("pentagon", "dod", "defense", "military", "army", "navy", "air force"),
    ),
    (
        "DIPLO",
        ("diplomat", "embassy", "treaty", "sanctions", "talks", "summit", "bilateral"),
    ),
)

# Sentiment tiers, scanned in this order
SENTIMENT_KEYWORDS: KeywordTable = (
    (
        "alarming",
        (
            "war",
            "invasion",
            "attack",
            "bomb",
            "missile",
            "nuclear",
            "strike",
            "killed",
            "casualties",
            "emergency",
            "crisis",
            "collapse",
            "catastrophe",
            "disaster",
            "threat",
            "weapons",
            "troops",
            "military action",
            "escalation",
            "conflict",
            "assassination",
            "coup",
            "martial law",
            "genocide",
            "massacre",
        ),
    ),
    (
        "critical",
        (
            "sanctions",
            "tensions",
            "clash",
            "dispute",
            "warning",
            "denounce",
            "condemn",
            "deadline",
            "ultimatum",
            "withdraw",
            "suspension",
            "expel",
            "protest",
            "riot",
            "unrest",
            "instability",
            "confrontation",
            "standoff",
            "brink",
            "deteriorating",
            "breakdown",
            "failed",
            "rejected",
            "veto",
            "hostile",
        ),
    ),
    (
        "negative",
        (
            "decline",
            "fall",
            "drop",
            "loss",
            "fail",
            "cut",
            "concern",
            "worry",
            "fear",
            "delay",
            "setback",
            "struggle",
            "challenge",
            "problem",
            "issue",
            "downturn",
            "recession",
            "inflation",
            "deficit",
            "debt",
            "layoff",
            "shutdown",
        ),
    ),
    (
        "positive",
        (
            "peace",
            "agreement",
            "deal",
            "treaty",
            "cooperation",
            "alliance",
            "progress",
            "success",
            "growth",
            "rise",
            "gain",
            "improve",
            "breakthrough",
            "resolution",
            "ceasefire",
            "summit",
            "partnership",
            "aid",
            "support",
            "stability",
            "reform",
            "recovery",
            "boost",
            "surge",
            "record high",
        ),
    ),
    (
        "neutral",
        (
            "announce",
            "report",
            "says",
            "plan",
            "consider",
            "discuss",
            "meet",
            "visit",
            "statement",
            "review",
            "analysis",
            "update",
            "schedule",
            "propose",
        ),
    ),
)

# Geopolitical themes for sentiment grouping (first match wins)
GEOPOLITICAL_THEMES: KeywordTable = (
    (
        "US-China",
        (
            "china",
            "beijing",
            "xi jinping",
            "taiwan",
            "south china sea",
            "us-china",
            "trade war",
        ),
    ),
    (
        "Russia-Ukraine",
        (
            "russia",
            "ukraine",
            "putin",
            "zelensky",
            "kremlin",
            "kyiv",
            "crimea",
            "donbas",
        ),
    ),
    (
        "Middle East",
        (
            "israel",
            "gaza",
            "iran",
            "saudi",
            "syria",
            "yemen",
            "hamas",
            "hezbollah",
            "netanyahu",
        ),
    ),
    (
        "NATO/Europe",
        ("nato", "eu", "european union", "brussels", "germany", "france", "uk"),
    ),
    (
        "North Korea",
        ("north korea", "pyongyang", "kim jong", "dprk", "korean peninsula"),
    ),
    ("Indo-Pacific", ("india", "japan", "australia", "asean", "quad", "indo-pacific")),
    ("Africa", ("africa", "sahel", "ethiopia", "sudan", "libya", "african union")),
    (
        "Latin America",
        ("venezuela", "brazil", "mexico", "cuba", "argentina", "latin america"),
    ),
    ("Energy", ("oil", "gas", "opec", "energy", "pipeline", "lng", "petroleum")),
    ("Nuclear", ("nuclear", "uranium", "iaea", "nonproliferation", "atomic")),
    ("Cyber", ("cyber", "hack", "ransomware", "data breach", "cyber attack")),
    ("Climate", ("climate", "emissions", "carbon", "cop", "environmental")),
)

DEFAULT_THEME = "General"


@dataclass(frozen=True)
class CorrelationTopic:
    """Topic definition with compiled regex patterns."""

    id: str
    patterns: tuple[re.Pattern, ...]
    category: str

    @classmethod
    def from_strings(
        cls, topic_id: str, patterns: list[str], category: str
    ) -> "CorrelationTopic":
        return cls(
            id=topic_id,
            patterns=tuple(re.compile(p, re.IGNORECASE) for p in patterns),
            category=category,
        )

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


_topic = CorrelationTopic.from_strings

# Correlation topics with compiled regex patterns
CORRELATION_TOPICS: tuple[CorrelationTopic, ...] = (
    _topic(
        "tariffs",
        [r"tariff", r"trade war", r"import tax", r"customs duty"],
        "Economic",
    ),
    _topic(
        "fed-rates",
        [
            r"federal reserve",
            r"interest rate",
            r"rate cut",
            r"rate hike",
            r"powell",
            r"fomc",
        ],
        "Economic",
    ),
    _topic(
        "inflation",
        [r"inflation", r"\bcpi\b", r"consumer price", r"cost of living"],
        "Economic",
    ),
    _topic(
        "ai-regulation",
        [
            r"ai regulation",
            r"artificial intelligence.*law",
            r"ai safety",
            r"ai governance",
        ],
        "Policy",
    ),
    _topic(
        "ai-breakthrough",
        [
            r"gpt-?5",
            r"agi",
            r"artificial general",
            r"ai breakthrough",
            r"llm.*advance",
        ],
        "Technology",
    ),
    _topic(
        "china-tensions",
        [
            r"china.*taiwan",
            r"south china sea",
            r"us.*china",
            r"beijing.*washington",
        ],
        "Geopolitics",
    ),
    _topic(
        "russia-ukraine",
        [r"ukraine", r"zelensky", r"putin.*war", r"crimea", r"donbas", r"kyiv"],
        "Conflict",
    ),
    _topic(
        "israel-gaza",
        [r"gaza", r"hamas", r"netanyahu", r"israel.*attack", r"hostage.*israel"],
        "Conflict",
    ),
    _topic(
        "iran",
        [r"iran.*nuclear", r"tehran", r"ayatollah", r"iranian.*strike", r"irgc"],
        "Geopolitics",
    ),
    _topic(
        "north-korea",
        [r"north korea", r"pyongyang", r"kim jong", r"dprk", r"korean.*missile"],
        "Geopolitics",
    ),
    _topic(
        "military-strikes",
        [r"air ?strike", r"missile strike", r"drone attack", r"shelling"],
        "Conflict",
    ),
    _topic(
        "crypto",
        [
            r"bitcoin",
            r"crypto.*regulation",
            r"ethereum",
            r"sec.*crypto",
            r"crypto.*crash",
        ],
        "Finance",
    ),
    _topic(
        "housing",
        [r"housing market", r"mortgage rate", r"home price", r"real estate.*crash"],
        "Economic",
    ),
    _topic(
        "layoffs",
        [
            r"layoff",
            r"job cut",
            r"workforce reduction",
            r"downsizing",
            r"mass firing",
        ],
        "Business",
    ),
    _topic(
        "bank-crisis",
        [r"bank.*fail", r"banking crisis", r"fdic", r"bank run", r"bank.*collapse"],
        "Finance",
    ),
    _topic(
        "election",
        [r"election", r"polling", r"campaign", r"ballot", r"voter", r"electoral"],
        "Policy",
    ),
    _topic(
        "immigration",
        [r"immigration", r"border.*crisis", r"migrant", r"deportation", r"asylum"],
        "Policy",
    ),
    _topic(
        "sanctions",
        [r"sanction", r"export control", r"embargo", r"asset freeze"],
        "Policy",
    ),
    _topic(
        "climate",
        [
            r"climate change",
            r"wildfire",
            r"hurricane",
            r"extreme weather",
            r"flood",
        ],
        "Environment",
    ),
    _topic(
        "pandemic",
        [
            r"pandemic",
            r"outbreak",
            r"virus.*spread",
            r"who.*emergency",
            r"bird flu",
            r"h5n1",
        ],
        "Health",
    ),
    _topic(
        "nuclear-threat",
        [
            r"nuclear.*threat",
            r"nuclear weapon",
            r"atomic",
            r"icbm",
            r"nuclear.*war",
        ],
        "Security",
    ),
    _topic(
        "supply-chain",
        [
            r"supply chain",
            r"shipping.*delay",
            r"port.*congestion",
            r"logistics.*crisis",
        ],
        "Economic",
    ),
    _topic(
        "big-tech",
        [r"antitrust.*tech", r"google.*monopoly", r"meta.*lawsuit", r"apple.*doj"],
        "Technology",
    ),
    _topic(
        "deepfake",
        [r"deepfake", r"ai.*misinformation", r"synthetic media", r"ai.*fraud"],
        "Technology",
    ),
    _topic(
        "cybersecurity",
        [
            r"cyber.*attack",
            r"ransomware",
            r"data breach",
            r"hack.*government",
            r"apt",
        ],
        "Security",
    ),
    _topic(
        "oil-energy",
        [r"oil price", r"opec", r"energy crisis", r"gas price", r"petroleum"],
        "Economic",
    ),
    _topic(
        "recession",
        [
            r"recession",
            r"economic downturn",
            r"gdp.*decline",
            r"economic.*crisis",
        ],
        "Economic",
    ),
)


def get_topic_by_id(
    topic_id: str, topics: tuple[CorrelationTopic, ...] = CORRELATION_TOPICS
) -> CorrelationTopic | None:
    """Get a topic by its ID."""
    for topic in topics:
        if topic.id == topic_id:
            return topic
    return None


def load_correlation_topics(path: str | Path) -> tuple[CorrelationTopic, ...]:
    """
    Load correlation topics from a JSON file.

    Expected layout::

        {"topics": [{"id": "tariffs", "category": "Economic",
                     "patterns": ["tariff", "trade war"]}]}

    Topics keep the order they are listed in.

    Raises:
        TaxonomyError: if the file cannot be read or a topic is invalid
    """
    config_path = Path(path)
    try:
        with open(config_path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TaxonomyError(f"cannot load topics: {e}", source=str(config_path))

    raw_topics = data.get("topics") if isinstance(data, dict) else None
    if not isinstance(raw_topics, list):
        raise TaxonomyError("'topics' must be a list", source=str(config_path))

    topics: list[CorrelationTopic] = []
    seen: set[str] = set()
    for raw in raw_topics:
        topic_id = raw.get("id") if isinstance(raw, dict) else None
        if not topic_id:
            raise TaxonomyError("topic without an id", source=str(config_path))
        if topic_id in seen:
            raise TaxonomyError(
                f"duplicate topic id '{topic_id}'", source=str(config_path)
            )
        patterns = raw.get("patterns") or []
        if not isinstance(patterns, list) or not patterns:
            raise TaxonomyError(
                f"topic '{topic_id}' has no patterns", source=str(config_path)
            )
        try:
            topic = CorrelationTopic.from_strings(
                topic_id, patterns, raw.get("category", "General")
            )
        except (re.error, TypeError) as e:
            raise TaxonomyError(
                f"bad pattern in topic '{topic_id}': {e}", source=str(config_path)
            )
        seen.add(topic_id)
        topics.append(topic)

    logger.info(f"Loaded {len(topics)} correlation topics from {config_path}")
    return tuple(topics)
