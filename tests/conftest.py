"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import asyncio
from pathlib import Path
from typing import Optional

import pytest

from toxicity_filter.classifier.base_classifier import BaseToxicityClassifier
from toxicity_filter.config import Settings
from toxicity_filter.keywords.keyword_filter import KeywordFilter
from toxicity_filter.models.classifier_models import ToxicityPrediction
from toxicity_filter.models.config_models import ModerationConfig
from toxicity_filter.models.enums import PipelineMode, ToxicityLabel
from toxicity_filter.pipeline.moderator import ContentModerator
from toxicity_filter.tokenizer.vocabulary import SpecialTokens, Vocabulary
from toxicity_filter.tokenizer.wordpiece import WordPieceTokenizer


class FakeClassifier(BaseToxicityClassifier):
    """In-memory classifier returning fixed scores, raising, or stalling on demand."""

    def __init__(
        self,
        scores: Optional[dict[ToxicityLabel, float]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        super().__init__(model_name="fake")
        self.scores = scores or {}
        self.error = error
        self.delay = delay
        self.calls: list[tuple[list[int], list[int]]] = []
        self.closed = False

    async def predict(
        self, token_ids: list[int], attention_mask: list[int]
    ) -> ToxicityPrediction:
        self.calls.append((token_ids, attention_mask))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return ToxicityPrediction(scores=self.scores)

    async def health_check(self) -> bool:
        return self.error is None

    async def close(self):
        self.closed = True


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def test_settings(fixtures_dir: Path) -> Settings:
    """Test settings pointing at the fixture resources.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            custom = test_settings.model_copy(update={"MODERATION_PRESET": "strict"})
    """
    return Settings(
        APP_NAME="Toxicity Filter (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        MODERATION_PRESET="balanced",
        VOCAB_PATH=str(fixtures_dir / "vocab.txt"),
        SPECIAL_TOKENS_PATH=str(fixtures_dir / "special_tokens.txt"),
        KEYWORDS_CRITICAL_PATH=str(fixtures_dir / "keywords_critical.txt"),
        KEYWORDS_MODERATE_PATH=str(fixtures_dir / "keywords_moderate.txt"),
        MAX_SEQUENCE_LENGTH=16,
        CLASSIFIER_URL="",
        PROMETHEUS_ENABLED=False,
        BATCH_MAX_TEXTS=5,
    )


@pytest.fixture
def special_tokens() -> SpecialTokens:
    return SpecialTokens(
        cls_token="<s>",
        sep_token="</s>",
        pad_token="<pad>",
        unk_token="<unk>",
        mask_token="<mask>",
    )


@pytest.fixture
def small_vocabulary(special_tokens: SpecialTokens) -> Vocabulary:
    """The seven-token vocabulary from the tokenizer's worked example."""
    return Vocabulary.from_lines(
        ["<s>", "</s>", "<pad>", "<unk>", "<mask>", "test", "##ing"],
        special_tokens,
    )


@pytest.fixture
def fixture_vocabulary(fixtures_dir: Path) -> Vocabulary:
    return Vocabulary.from_files(fixtures_dir / "vocab.txt", fixtures_dir / "special_tokens.txt")


@pytest.fixture
def tokenizer(fixture_vocabulary: Vocabulary) -> WordPieceTokenizer:
    return WordPieceTokenizer(fixture_vocabulary, max_length=16)


@pytest.fixture
def keyword_filter(fixtures_dir: Path) -> KeywordFilter:
    return KeywordFilter.from_files(
        fixtures_dir / "keywords_critical.txt",
        fixtures_dir / "keywords_moderate.txt",
    )


@pytest.fixture
def fake_classifier() -> FakeClassifier:
    """Classifier that finds nothing."""
    return FakeClassifier()


@pytest.fixture
def create_classifier():
    """Factory fixture to create FakeClassifier with custom behaviour.

    Usage:
        def test_something(create_classifier):
            classifier = create_classifier(scores={ToxicityLabel.THREAT: 0.9})
    """

    def _create(
        scores: Optional[dict[ToxicityLabel, float]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> FakeClassifier:
        return FakeClassifier(scores=scores, error=error, delay=delay)

    return _create


@pytest.fixture
def create_moderator(tokenizer: WordPieceTokenizer, keyword_filter: KeywordFilter):
    """Factory fixture to create ContentModerator over the fixture resources.

    Usage:
        def test_something(create_moderator, create_classifier):
            moderator = create_moderator(
                classifier=create_classifier(scores={ToxicityLabel.TOXIC: 0.8}),
                pipeline_mode=PipelineMode.CLASSIFIER_ONLY,
            )
    """

    def _create(
        classifier: Optional[BaseToxicityClassifier] = None,
        toxicity_threshold: float = 0.5,
        cache_capacity: int = 100,
        pipeline_mode: PipelineMode = PipelineMode.CLASSIFIER_WITH_KEYWORDS,
        **kwargs,
    ) -> ContentModerator:
        config = ModerationConfig(
            toxicity_threshold=toxicity_threshold,
            cache_capacity=cache_capacity,
            pipeline_mode=pipeline_mode,
        )
        return ContentModerator(
            tokenizer=tokenizer,
            keyword_filter=keyword_filter,
            classifier=classifier or FakeClassifier(),
            config=config,
            **kwargs,
        )

    return _create
