"""
Situation monitor entry point.

Reads a JSON array of headline records and prints sentiment and correlation
reports for it.
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from monitor.datasource.parsing import to_headline
from monitor.exceptions import MonitorError
from monitor.pipeline import AnalysisPipeline
from monitor.reports.formatter import (
    format_correlation_alert,
    format_correlation_report,
    format_sentiment_summary,
)
from monitor.settings import global_settings


def load_headlines(path: Path) -> list[dict]:
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of headline records")
    return [item for item in data if isinstance(item, dict)]


def main(argv: list[str] | None = None) -> int:
    """Run the analysis over a headline file."""
    parser = argparse.ArgumentParser(description="Analyze a batch of headlines.")
    parser.add_argument("path", type=Path, help="JSON file with headline records")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="How many recent headlines to score for sentiment",
    )
    parser.add_argument(
        "--alert", action="store_true", help="Print the compact alert format"
    )
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=global_settings.log_level.upper())

    try:
        raw_items = load_headlines(args.path)
        pipeline = AnalysisPipeline()
    except (OSError, ValueError, MonitorError) as e:
        logger.error(f"Cannot start analysis: {e}")
        return 1

    headlines = pipeline.enrich_all(to_headline(item) for item in raw_items)
    logger.info(f"Loaded {len(headlines)} headlines from {args.path}")

    sentiment = pipeline.analyze_sentiment(headlines, limit=args.limit)
    correlations = pipeline.analyze_correlations(headlines)
    summary = pipeline.get_correlation_summary(correlations)

    print(format_sentiment_summary(sentiment) or "No headlines to score.")
    print()
    print(f"Status: {summary.status}")
    if args.alert:
        print(format_correlation_alert(correlations))
    else:
        print(format_correlation_report(correlations))
    return 0


if __name__ == "__main__":
    sys.exit(main())
