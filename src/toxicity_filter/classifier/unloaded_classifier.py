"""Stand-in classifier used when no model endpoint is configured."""

from toxicity_filter.classifier.base_classifier import BaseToxicityClassifier
from toxicity_filter.classifier.exceptions import ClassifierUnavailableError
from toxicity_filter.models.classifier_models import ToxicityPrediction


class UnloadedClassifier(BaseToxicityClassifier):
    """
    Classifier with no model behind it.

    Every prediction raises ClassifierUnavailableError, so a moderator running
    the classifier stage degrades to keyword-only decisions.
    """

    def __init__(self, model_name: str = "none"):
        super().__init__(model_name)

    async def predict(
        self, token_ids: list[int], attention_mask: list[int]
    ) -> ToxicityPrediction:
        raise ClassifierUnavailableError(
            "No classifier model is loaded",
            details={"model": self.model_name},
        )

    async def health_check(self) -> bool:
        return False

    @property
    def is_model_available(self) -> bool:
        return False
