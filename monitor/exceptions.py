"""
Custom exceptions for configuration and taxonomy loading.
"""


class MonitorError(Exception):
    """Base exception for monitor errors."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


class TaxonomyError(MonitorError):
    """Taxonomy configuration is unreadable or invalid."""

    def __init__(self, detail: str, source: str | None = None):
        self.detail = detail
        msg = f"Invalid taxonomy configuration: {detail}"
        if source:
            msg += f" (in {source})"
        super().__init__(msg, source=source)
