"""Custom alert keyword set, kept in memory alongside the default lexicon."""

from loguru import logger

from monitor.analysis.config import ALERT_KEYWORDS


class AlertKeywordStore:
    """
    Holds a user-editable alert keyword list.

    While ``enabled`` is False the default ALERT_KEYWORDS are active and the
    custom list is only edited, not used.
    """

    def __init__(self, custom: list[str] | None = None, enabled: bool = False):
        self.custom: list[str] = (
            list(custom) if custom is not None else list(ALERT_KEYWORDS)
        )
        self.enabled = enabled

    def active_keywords(self) -> list[str]:
        """Custom keywords if enabled, defaults otherwise."""
        return list(self.custom) if self.enabled else list(ALERT_KEYWORDS)

    def set_custom_keywords(self, keywords: list[str]) -> None:
        self.custom = list(keywords)

    def add_keyword(self, keyword: str) -> bool:
        """Add a keyword. Returns True if added, False if blank or present."""
        trimmed = keyword.strip().lower()
        if not trimmed or trimmed in self.custom:
            return False
        self.custom.append(trimmed)
        logger.info(f"Added alert keyword '{trimmed}'")
        return True

    def remove_keyword(self, keyword: str) -> bool:
        """Remove a keyword. Returns True if removed."""
        if keyword not in self.custom:
            return False
        self.custom = [k for k in self.custom if k != keyword]
        logger.info(f"Removed alert keyword '{keyword}'")
        return True

    def toggle_enabled(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def reset(self) -> None:
        """Restore default keywords and disable the custom list."""
        self.custom = list(ALERT_KEYWORDS)
        self.enabled = False
