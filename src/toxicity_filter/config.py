"""
Configuration settings for the Toxicity Filter service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from toxicity_filter.models.config_models import ModerationConfig
from toxicity_filter.models.enums import PipelineMode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Toxicity Filter"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Moderation ===
    MODERATION_PRESET: str = "balanced"  # balanced, strict, lenient, fast
    TOXICITY_THRESHOLD: Optional[float] = None  # overrides the preset when set
    CACHE_CAPACITY: Optional[int] = None
    PIPELINE_MODE: Optional[PipelineMode] = None

    # === Resources ===
    VOCAB_PATH: str = "resources/toxicity_detector_vocab.txt"
    SPECIAL_TOKENS_PATH: str = "resources/toxicity_detector_special_tokens.txt"
    KEYWORDS_CRITICAL_PATH: str = "resources/keywords_critical.txt"
    KEYWORDS_MODERATE_PATH: str = "resources/keywords_moderate.txt"
    MAX_SEQUENCE_LENGTH: int = 128

    # === Classifier ===
    CLASSIFIER_URL: str = ""  # empty = no model, moderation runs on keywords alone
    CLASSIFIER_MODEL: str = "toxic-bert"
    CLASSIFIER_TIMEOUT: float = 2.0  # seconds, per classifier call
    CLASSIFIER_MAX_RETRIES: int = 2

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    # === API ===
    BATCH_MAX_TEXTS: int = 100

    def moderation_config(self) -> ModerationConfig:
        """
        Build the moderator configuration: named preset plus explicit overrides.

        Raises:
            ValueError: Unknown preset or out-of-range override
        """
        config = ModerationConfig.from_preset(self.MODERATION_PRESET)

        overrides: dict = {}
        if self.TOXICITY_THRESHOLD is not None:
            overrides["toxicity_threshold"] = self.TOXICITY_THRESHOLD
        if self.CACHE_CAPACITY is not None:
            overrides["cache_capacity"] = self.CACHE_CAPACITY
        if self.PIPELINE_MODE is not None:
            overrides["pipeline_mode"] = self.PIPELINE_MODE

        if not overrides:
            return config
        return ModerationConfig(**{**config.model_dump(), **overrides})


# Global settings instance
settings = Settings()
