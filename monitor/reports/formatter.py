"""Markdown formatters for sentiment and correlation alerts."""

from monitor.analysis.sentiment import get_sentiment_emoji
from monitor.analysis.types import CorrelationResults, SentimentSummary

LEVEL_EMOJI = {"high": "🔴", "elevated": "🟠", "emerging": "🟡"}


def escape_md(text: str) -> str:
    """Escape special Markdown characters for safe display."""
    for char in ["_", "*", "`", "[", "]", "(", ")"]:
        text = text.replace(char, "\\" + char)
    return text


def _truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


def format_correlation_alert(results: CorrelationResults | None) -> str:
    """Format correlation analysis results as an alert."""
    if not results or results.total_signals == 0:
        return ""

    lines = [
        "🚨 *Correlation Alert*",
        "",
        f"*{results.total_signals}* signals detected",
        "",
    ]

    if results.emerging_patterns:
        lines.append("*Emerging Patterns*")
        for pattern in results.emerging_patterns[:5]:
            level_emoji = LEVEL_EMOJI.get(pattern.level, "⚪")
            lines.append(
                f"{level_emoji} {pattern.name} ({pattern.category}): "
                f"{pattern.count} mentions [{pattern.level}]"
            )
            lines.append(f"   Sources: {', '.join(pattern.sources[:3])}")
        lines.append("")

    if results.momentum_signals:
        lines.append("*Momentum*")
        for signal in results.momentum_signals[:3]:
            trend_emoji = "📈" if signal.momentum in ("rising", "surging") else "➡️"
            lines.append(
                f"{trend_emoji} {signal.name}: {signal.momentum} (+{signal.delta})"
            )
        lines.append("")

    if results.predictive_signals:
        lines.append("*Predictive Signals*")
        for pred in results.predictive_signals[:3]:
            lines.append(
                f"• {pred.name}: {pred.prediction} (confidence: {pred.confidence}%)"
            )
        lines.append("")

    if results.emerging_patterns:
        lines.append("*Related Headlines*")
        seen_titles: set[str] = set()
        for pattern in results.emerging_patterns[:3]:
            for headline in pattern.headlines[:2]:
                if headline.title not in seen_titles:
                    lines.append(f"• {escape_md(_truncate(headline.title, 60))}")
                    seen_titles.add(headline.title)
                if len(seen_titles) >= 5:
                    break
            if len(seen_titles) >= 5:
                break

    return "\n".join(lines).rstrip()


def format_correlation_report(results: CorrelationResults | None) -> str:
    """Format every correlation section as a plain Markdown report."""
    if not results:
        return "No correlation data available."

    sections: list[str] = []

    if results.emerging_patterns:
        lines = ["**Emerging Patterns:**"]
        for p in results.emerging_patterns:
            lines.append(f"- {p.name} ({p.category}): {p.count} mentions [{p.level}]")
        sections.append("\n".join(lines))

    if results.momentum_signals:
        lines = ["**Momentum Signals:**"]
        for m in results.momentum_signals:
            lines.append(f"- {m.name}: {m.momentum} (+{m.delta} in 10 min)")
        sections.append("\n".join(lines))

    if results.cross_source_correlations:
        lines = ["**Cross-Source Correlations:**"]
        for c in results.cross_source_correlations:
            lines.append(f"- {c.name}: {c.source_count} sources [{c.level}]")
            lines.append(f"  Sources: {', '.join(c.sources)}")
        sections.append("\n".join(lines))

    if results.predictive_signals:
        lines = ["**Predictive Signals:**"]
        for s in results.predictive_signals:
            lines.append(f"- {s.name}: {s.prediction} (confidence: {s.confidence}%)")
        sections.append("\n".join(lines))

    return "\n\n".join(sections) if sections else "No significant patterns detected."


def format_sentiment_summary(summary: SentimentSummary | None) -> str:
    """Format a sentiment summary with distribution and themes."""
    if not summary:
        return ""

    lines = [
        f"{get_sentiment_emoji(summary.overall)} *Sentiment: "
        f"{summary.overall.upper()}* ({summary.overall_score:+.2f})",
        "",
    ]

    dist = summary.distribution
    lines.append(
        f"Alarming {dist.alarming} | Critical {dist.critical} | "
        f"Negative {dist.negative} | Neutral {dist.neutral} | "
        f"Positive {dist.positive}"
    )

    if summary.themes:
        lines.append("")
        lines.append("*Themes*")
        for theme in summary.themes:
            lines.append(
                f"{get_sentiment_emoji(theme.sentiment)} {theme.theme}: "
                f"{theme.count} ({theme.sentiment})"
            )

    flagged = [
        h for h in summary.top_headlines if h.sentiment in ("alarming", "critical")
    ]
    if flagged:
        lines.append("")
        lines.append("*Flagged Headlines*")
        for h in flagged[:5]:
            lines.append(
                f"{get_sentiment_emoji(h.sentiment)} "
                f"{escape_md(_truncate(h.headline.title, 80))}"
            )

    return "\n".join(lines)
