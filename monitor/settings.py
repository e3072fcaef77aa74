from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", populate_by_name=True, extra="ignore"
    )

    # Sentiment Configuration
    sentiment_limit: int = Field(default=20, alias="SENTIMENT_LIMIT")

    # Correlation Configuration
    history_retention_minutes: int = Field(
        default=30, alias="HISTORY_RETENTION_MINUTES"
    )
    momentum_window_minutes: int = Field(default=10, alias="MOMENTUM_WINDOW_MINUTES")
    correlation_topics_path: str | None = Field(
        default=None, alias="CORRELATION_TOPICS_PATH"
    )

    # Enrichment Configuration
    enrich_with_description: bool = Field(
        default=False, alias="ENRICH_WITH_DESCRIPTION"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()


global_settings = Settings()
