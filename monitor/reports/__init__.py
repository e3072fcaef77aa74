"""
Report formatting module.
"""

from monitor.reports.formatter import (
    escape_md,
    format_correlation_alert,
    format_correlation_report,
    format_sentiment_summary,
)

__all__ = [
    "escape_md",
    "format_correlation_alert",
    "format_correlation_report",
    "format_sentiment_summary",
]
