"""
Content moderation pipeline.

Cache -> Keyword filter (optional) -> Classifier (optional) -> Aggregation.

`analyze` never raises for per-request problems: a classifier that is
unavailable, slow, unreachable or returns garbage contributes no issues and
the decision is made on whatever the other layers found (fail-open).
"""

import asyncio
import time
from typing import Iterable, Optional

import structlog
from pydantic import ValidationError

from toxicity_filter.cache.lru_cache import CacheStatistics, LRUCache
from toxicity_filter.classifier.base_classifier import BaseToxicityClassifier
from toxicity_filter.classifier.exceptions import (
    ClassifierConnectionError,
    ClassifierInvalidOutputError,
    ClassifierTimeoutError,
    ClassifierUnavailableError,
)
from toxicity_filter.keywords.keyword_filter import KeywordFilter
from toxicity_filter.models.classifier_models import ToxicityPrediction
from toxicity_filter.models.config_models import ModerationConfig
from toxicity_filter.models.enums import AnalysisLayer
from toxicity_filter.models.moderation_models import Issue, ModerationResult
from toxicity_filter.monitoring.metrics import (
    classifier_failures_total,
    classifier_latency_seconds,
    moderation_cache_lookups_total,
    moderation_duration_seconds,
    moderation_requests_total,
)
from toxicity_filter.pipeline.aggregation import DEFAULT_POLICY, SeverityPolicy, build_result
from toxicity_filter.tokenizer.wordpiece import WordPieceTokenizer

logger = structlog.get_logger(__name__)


def normalize_text(text: str) -> str:
    """Cache key and matching form of a text: trimmed and lower-cased."""
    return text.strip().lower()


def _classifier_error_type(error: BaseException) -> str:
    if isinstance(error, (ClassifierTimeoutError, asyncio.TimeoutError)):
        return "timeout"
    if isinstance(error, ClassifierUnavailableError):
        return "unavailable"
    if isinstance(error, ClassifierConnectionError):
        return "connection"
    # pydantic rejects out-of-range scores while a prediction is being built
    if isinstance(error, (ClassifierInvalidOutputError, ValidationError)):
        return "invalid_output"
    return "error"


class ContentModerator:
    """
    Orchestrates the moderation layers for one configuration.

    The result cache is the only mutable state and serializes its own
    operations, so one moderator can serve concurrent `analyze` calls.
    Concurrent misses for the same text may both reach the classifier; the
    last result stored wins.
    """

    def __init__(
        self,
        tokenizer: WordPieceTokenizer,
        keyword_filter: KeywordFilter,
        classifier: BaseToxicityClassifier,
        config: Optional[ModerationConfig] = None,
        policy: SeverityPolicy = DEFAULT_POLICY,
        classifier_timeout: Optional[float] = None,
    ):
        """
        Args:
            tokenizer: Tokenizer matching the classifier's vocabulary
            keyword_filter: Loaded keyword filter
            classifier: Classifier backend (may be an UnloadedClassifier)
            config: Threshold, cache capacity and pipeline mode (default: balanced)
            policy: Severity weights and level thresholds
            classifier_timeout: Upper bound in seconds for one classifier call
                (None = rely on the classifier's own timeout)
        """
        self._tokenizer = tokenizer
        self._keyword_filter = keyword_filter
        self._classifier = classifier
        self._config = config or ModerationConfig.balanced()
        self._policy = policy
        self._classifier_timeout = classifier_timeout
        self._cache: LRUCache[str, ModerationResult] = LRUCache(self._config.cache_capacity)

        logger.info(
            "Content moderator initialized",
            pipeline_mode=self._config.pipeline_mode.value,
            toxicity_threshold=self._config.toxicity_threshold,
            cache_capacity=self._config.cache_capacity,
            classifier=repr(classifier),
            classifier_timeout=classifier_timeout,
        )

    @property
    def config(self) -> ModerationConfig:
        return self._config

    @property
    def policy(self) -> SeverityPolicy:
        return self._policy

    @property
    def classifier(self) -> BaseToxicityClassifier:
        return self._classifier

    async def analyze(self, text: str) -> ModerationResult:
        """
        Run the moderation pipeline on one text.

        Args:
            text: Raw user text

        Returns:
            ModerationResult; cache hits are returned as a cached copy
            (processing_time_ms=0, layers_used starting with CACHE)
        """
        start_time = time.perf_counter()
        normalized = normalize_text(text)

        if not normalized:
            result = ModerationResult.acceptable(
                text, processing_time_ms=self._elapsed_ms(start_time), layers_used=[]
            )
            self._record_decision(result)
            return result

        stored = self._cache.get(normalized)
        if stored is not None:
            moderation_cache_lookups_total.labels(result="hit").inc()
            result = ModerationResult.cached(stored)
            self._record_decision(result)
            logger.debug("Moderation cache hit", level=result.level.value)
            return result
        moderation_cache_lookups_total.labels(result="miss").inc()

        issues: list[Issue] = []
        layers_used: list[AnalysisLayer] = []
        mode = self._config.pipeline_mode

        if mode.runs_keywords:
            keyword_issues = self._keyword_filter.check(normalized)
            if keyword_issues:
                issues.extend(keyword_issues)
                layers_used.append(AnalysisLayer.KEYWORD_FILTER)

        if mode.runs_classifier:
            issues.extend(await self._run_classifier(normalized))
            layers_used.append(AnalysisLayer.CLASSIFIER)

        result = build_result(
            text=text,
            issues=issues,
            layers_used=layers_used,
            toxicity_threshold=self._config.toxicity_threshold,
            processing_time_ms=self._elapsed_ms(start_time),
            policy=self._policy,
        )
        # the caller gets its own copy; list fields stay mutable on frozen models
        self._cache.set(normalized, result.model_copy(deep=True))

        moderation_duration_seconds.observe(result.processing_time_ms / 1000.0)
        self._record_decision(result)
        logger.info(
            "Content moderated",
            level=result.level.value,
            acceptable=result.is_acceptable,
            severity=round(result.severity_score, 3),
            issue_count=len(result.detected_issues),
            layers=[layer.value for layer in result.layers_used],
            text_length=len(text),
            processing_time_ms=round(result.processing_time_ms, 2),
        )
        return result

    async def _run_classifier(self, normalized_text: str) -> list[Issue]:
        """Classifier stage: one issue per label strictly above the threshold."""
        start_time = time.perf_counter()
        try:
            encoded = self._tokenizer.tokenize(normalized_text)
            call = self._classifier.predict(encoded.token_ids, encoded.attention_mask)
            if self._classifier_timeout is not None:
                prediction = await asyncio.wait_for(call, timeout=self._classifier_timeout)
            else:
                prediction = await call
            issues = self._issues_from_prediction(prediction)
        except Exception as e:
            error_type = _classifier_error_type(e)
            classifier_latency_seconds.labels(success="false").observe(
                time.perf_counter() - start_time
            )
            classifier_failures_total.labels(error_type=error_type).inc()
            logger.warning(
                "Classifier failed, continuing without classifier issues",
                error_type=error_type,
                error=str(e),
                exception_class=type(e).__name__,
            )
            return []

        classifier_latency_seconds.labels(success="true").observe(
            time.perf_counter() - start_time
        )
        return issues

    def _issues_from_prediction(self, prediction: ToxicityPrediction) -> list[Issue]:
        """
        Raises:
            ClassifierInvalidOutputError: A score outside [0, 1]
        """
        try:
            return [
                Issue(
                    type=label.issue_type,
                    score=prediction.scores[label],
                    source=AnalysisLayer.CLASSIFIER,
                )
                for label in prediction.labels_above_threshold(self._config.toxicity_threshold)
            ]
        except ValidationError as e:
            raise ClassifierInvalidOutputError(
                "Classifier returned an invalid score",
                details={"error_count": e.error_count()},
            ) from e

    async def is_safe(self, text: str) -> bool:
        """Quick check if text is acceptable."""
        result = await self.analyze(text)
        return result.is_acceptable

    async def check(self, text: str) -> tuple[bool, Optional[str]]:
        """Acceptability plus the user message when rejected."""
        result = await self.analyze(text)
        if result.is_acceptable:
            return True, None
        return False, result.user_message

    async def is_safe_batch(self, texts: Iterable[str]) -> list[bool]:
        """Check texts one after another, preserving order."""
        results: list[bool] = []
        for text in texts:
            results.append(await self.is_safe(text))
        return results

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Moderation cache cleared")

    def cache_statistics(self) -> CacheStatistics:
        return self._cache.statistics

    async def close(self):
        """Release classifier resources."""
        await self._classifier.close()

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

    @staticmethod
    def _record_decision(result: ModerationResult) -> None:
        moderation_requests_total.labels(
            level=result.level.value,
            acceptable=str(result.is_acceptable).lower(),
        ).inc()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"mode={self._config.pipeline_mode.value}, "
            f"threshold={self._config.toxicity_threshold}, "
            f"cache={self._cache!r})"
        )
