"""
FastAPI dependency injection for the toxicity filter service.

Provides singleton instances of expensive resources (vocabulary, keyword
lists, classifier client, moderator with its cache).
"""

from functools import lru_cache

import structlog
from fastapi import Depends

from toxicity_filter.classifier.base_classifier import BaseToxicityClassifier
from toxicity_filter.classifier.http_classifier import HTTPToxicityClassifier
from toxicity_filter.classifier.unloaded_classifier import UnloadedClassifier
from toxicity_filter.config import Settings, settings
from toxicity_filter.keywords.keyword_filter import KeywordFilter
from toxicity_filter.pipeline.moderator import ContentModerator
from toxicity_filter.tokenizer.wordpiece import WordPieceTokenizer

logger = structlog.get_logger(__name__)


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton."""
    return settings


@lru_cache()
def get_tokenizer() -> WordPieceTokenizer:
    """
    Get singleton tokenizer.

    Loads the vocabulary once and reuses it across requests.

    Raises:
        ResourceLoadError: Vocabulary or special-tokens file missing
        MissingSpecialTokensError: Special token undeclared or not in vocabulary
    """
    app_settings = get_settings()
    return WordPieceTokenizer.from_files(
        app_settings.VOCAB_PATH,
        app_settings.SPECIAL_TOKENS_PATH,
        max_length=app_settings.MAX_SEQUENCE_LENGTH,
    )


@lru_cache()
def get_keyword_filter() -> KeywordFilter:
    """
    Get singleton keyword filter.

    Raises:
        ResourceLoadError: Keyword list missing or unreadable
    """
    app_settings = get_settings()
    return KeywordFilter.from_files(
        app_settings.KEYWORDS_CRITICAL_PATH,
        app_settings.KEYWORDS_MODERATE_PATH,
    )


@lru_cache()
def get_classifier() -> BaseToxicityClassifier:
    """
    Get singleton classifier with connection pooling.

    Without CLASSIFIER_URL the service runs with an UnloadedClassifier and
    every decision falls back to the keyword filter.
    """
    app_settings = get_settings()
    if not app_settings.CLASSIFIER_URL:
        logger.warning("No classifier URL configured, classifier stage will fail open")
        return UnloadedClassifier()

    return HTTPToxicityClassifier(
        base_url=app_settings.CLASSIFIER_URL,
        model_name=app_settings.CLASSIFIER_MODEL,
        timeout=app_settings.CLASSIFIER_TIMEOUT,
        max_retries=app_settings.CLASSIFIER_MAX_RETRIES,
    )


@lru_cache()
def get_moderator() -> ContentModerator:
    """
    Get singleton content moderator.

    One moderator per process so the result cache is shared across requests.
    Built eagerly at startup; resource errors abort startup.
    """
    app_settings = get_settings()
    return ContentModerator(
        tokenizer=get_tokenizer(),
        keyword_filter=get_keyword_filter(),
        classifier=get_classifier(),
        config=app_settings.moderation_config(),
        classifier_timeout=app_settings.CLASSIFIER_TIMEOUT,
    )


def get_batch_limit(app_settings: Settings = Depends(get_settings)) -> int:
    """Maximum number of texts accepted by the batch endpoint."""
    return app_settings.BATCH_MAX_TEXTS
