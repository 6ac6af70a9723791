"""
Models exchanged with the toxicity classifier.

EncodedInput is what the tokenizer produces and the classifier consumes;
ToxicityPrediction is what the classifier returns. Both are internal to the
classifier boundary and independent of any particular inference backend.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from toxicity_filter.models.enums import ToxicityLabel


class EncodedInput(BaseModel):
    """Fixed-length token ids with a parallel attention mask."""

    model_config = ConfigDict(frozen=True)

    token_ids: list[int] = Field(..., description="Vocabulary ids, padded/truncated")
    attention_mask: list[int] = Field(..., description="1 = real token, 0 = padding")

    @model_validator(mode="after")
    def _check_lengths(self) -> "EncodedInput":
        if len(self.token_ids) != len(self.attention_mask):
            raise ValueError(
                f"token_ids ({len(self.token_ids)}) and attention_mask "
                f"({len(self.attention_mask)}) must have the same length"
            )
        return self

    @property
    def length(self) -> int:
        return len(self.token_ids)

    @property
    def real_token_count(self) -> int:
        return sum(self.attention_mask)


Probability = Annotated[float, Field(ge=0.0, le=1.0, allow_inf_nan=False)]


class ToxicityPrediction(BaseModel):
    """Per-label probabilities from a multi-label toxicity classifier."""

    model_config = ConfigDict(frozen=True)

    scores: dict[ToxicityLabel, Probability] = Field(default_factory=dict)

    @property
    def max_score(self) -> float:
        return max(self.scores.values(), default=0.0)

    @property
    def dominant_label(self) -> Optional[ToxicityLabel]:
        if not self.scores:
            return None
        return max(self.scores, key=lambda label: self.scores[label])

    def is_above_threshold(self, threshold: float) -> bool:
        """True if some label is strictly above `threshold`."""
        return self.max_score > threshold

    def labels_above_threshold(self, threshold: float) -> list[ToxicityLabel]:
        """Labels strictly above `threshold`, in the order the scores were reported.

        Same comparison the moderator uses to raise classifier issues.
        """
        return [label for label, score in self.scores.items() if score > threshold]
