"""
Abstract base classifier for toxicity inference.

Defines the interface the ContentModerator consumes. Implementations may run a
model in-process, call a remote inference server, or stand in when no model is
configured; the moderator does not care which.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Sequence

import structlog

from toxicity_filter.classifier.exceptions import ClassifierInvalidOutputError
from toxicity_filter.models.classifier_models import ToxicityPrediction
from toxicity_filter.models.enums import ToxicityLabel

logger = structlog.get_logger(__name__)


def prediction_from_probabilities(probabilities: Sequence[Any]) -> ToxicityPrediction:
    """
    Map an index-ordered probability vector onto the toxicity labels.

    Index i maps to the i-th ToxicityLabel. A shorter vector fills only the
    labels it covers; entries past the last label are ignored.

    Raises:
        ClassifierInvalidOutputError: Empty vector, or an entry that is not a
            finite number in [0, 1]
    """
    if not probabilities:
        raise ClassifierInvalidOutputError("Classifier returned no probabilities")

    labels = list(ToxicityLabel)
    scores: dict[ToxicityLabel, float] = {}
    for index, (label, value) in enumerate(zip(labels, probabilities)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ClassifierInvalidOutputError(
                "Classifier returned a non-numeric probability",
                details={"index": index, "value": repr(value)},
            )
        probability = float(value)
        if math.isnan(probability) or not 0.0 <= probability <= 1.0:
            raise ClassifierInvalidOutputError(
                "Classifier probability out of range",
                details={"index": index, "value": probability},
            )
        scores[label] = probability

    return ToxicityPrediction(scores=scores)


class BaseToxicityClassifier(ABC):
    """
    Abstract base class for toxicity classifiers.

    Responsibilities:
    - Run inference on an already tokenized input
    - Return per-label probabilities as a ToxicityPrediction
    - Report health / model availability

    Does NOT handle:
    - Tokenization (that's WordPieceTokenizer's job)
    - Thresholding and aggregation (that's ContentModerator's job)
    - Overall inference timeout (enforced by the moderator)
    """

    def __init__(self, model_name: str = "toxic-bert"):
        """
        Args:
            model_name: Name of the model this classifier serves
        """
        self.model_name = model_name

        logger.info(
            "Initialized toxicity classifier",
            classifier_class=self.__class__.__name__,
            model_name=model_name,
        )

    @abstractmethod
    async def predict(
        self, token_ids: list[int], attention_mask: list[int]
    ) -> ToxicityPrediction:
        """
        Run inference on one encoded input.

        Args:
            token_ids: Fixed-length vocabulary ids
            attention_mask: Parallel mask (1 = real token, 0 = padding)

        Returns:
            ToxicityPrediction with one probability per covered label

        Raises:
            ClassifierUnavailableError: No model loaded / available
            ClassifierInvalidOutputError: Malformed probability vector
            ClassifierConnectionError: Inference backend unreachable
            ClassifierTimeoutError: Inference exceeded the backend timeout
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check whether the classifier can serve predictions.

        Note:
            This should NOT raise exceptions - return False on error.
        """

    @property
    def is_model_available(self) -> bool:
        """Whether a model is configured at all (no I/O)."""
        return True

    async def close(self):
        """Release backend resources. Default implementation does nothing."""
        logger.debug("Closing classifier", classifier_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model_name={self.model_name})"
