"""
Feed record normalisation for RSS and GDELT payloads.
"""

from monitor.datasource.parsing import (
    clean_html_content,
    hash_code,
    parse_date,
    parse_gdelt_articles,
    parse_gdelt_date,
    parse_rss_document,
    to_headline,
)

__all__ = [
    "clean_html_content",
    "hash_code",
    "parse_date",
    "parse_gdelt_articles",
    "parse_gdelt_date",
    "parse_rss_document",
    "to_headline",
]
