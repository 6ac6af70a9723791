"""
Moderation result models.

These models are what the ContentModerator returns to callers (and what the
cache stores). They are frozen: a cached result is never mutated, a new copy
is built with `ModerationResult.cached` instead.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from toxicity_filter.models.enums import (
    AnalysisLayer,
    IssueType,
    ModerationLevel,
    ReasonCategory,
)


class Issue(BaseModel):
    """A single signal raised by one pipeline layer."""

    model_config = ConfigDict(frozen=True)

    type: IssueType = Field(..., description="Issue category")
    score: float = Field(..., ge=0.0, le=1.0, description="Raw layer score (0-1)")
    source: AnalysisLayer = Field(..., description="Layer that raised the issue")


class ModerationReason(BaseModel):
    """Human-readable reason derived from an Issue."""

    model_config = ConfigDict(frozen=True)

    category: ReasonCategory
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: AnalysisLayer

    @property
    def description(self) -> str:
        """e.g. 'threatening language (92% confidence)'."""
        percentage = int(self.confidence * 100)
        return f"{self.category.display_name} ({percentage}% confidence)"


class ModerationResult(BaseModel):
    """
    Outcome of analyzing one piece of text.

    `layers_used` is ordered by pipeline priority. Results stored in the cache
    never contain AnalysisLayer.CACHE; that tag is only added to the copy
    returned on a cache hit.
    """

    model_config = ConfigDict(frozen=True)

    is_acceptable: bool = Field(..., description="Overall allow/deny decision")
    level: ModerationLevel = Field(..., description="Derived moderation level")
    severity_score: float = Field(..., ge=0.0, le=1.0, description="Combined severity")
    detected_issues: list[Issue] = Field(default_factory=list)
    reasons: list[ModerationReason] = Field(default_factory=list)
    user_message: str = Field(..., description="Message selected by level")
    analyzed_text: str = Field(..., description="Text as submitted by the caller")
    processing_time_ms: float = Field(..., ge=0.0)
    layers_used: list[AnalysisLayer] = Field(default_factory=list)

    @property
    def primary_issue(self) -> Optional[Issue]:
        """Issue with the highest score (first encountered wins ties)."""
        if not self.detected_issues:
            return None
        return max(self.detected_issues, key=lambda issue: issue.score)

    @property
    def was_cached(self) -> bool:
        return AnalysisLayer.CACHE in self.layers_used

    @property
    def summary(self) -> str:
        if self.is_acceptable:
            return "Content is acceptable"

        primary = self.primary_issue
        if primary is not None:
            return f"Detected: {primary.type.display_name} (score: {primary.score:.2f})"

        return f"Content flagged (severity: {self.severity_score:.2f})"

    @property
    def help_messages(self) -> list[str]:
        return [issue.type.help_message for issue in self.detected_issues]

    def __str__(self) -> str:
        layers = ", ".join(layer.value for layer in self.layers_used)
        return (
            "ModerationResult {\n"
            f"  level: {self.level.value}\n"
            f"  acceptable: {self.is_acceptable}\n"
            f"  severity: {self.severity_score:.3f}\n"
            f"  issues: {len(self.detected_issues)}\n"
            f'  message: "{self.user_message}"\n'
            f"  processing: {self.processing_time_ms:.1f}ms\n"
            f"  layers: {layers}\n"
            "}"
        )

    @classmethod
    def acceptable(
        cls,
        text: str,
        processing_time_ms: float,
        layers_used: list[AnalysisLayer],
    ) -> "ModerationResult":
        """Canonical result for content with no issues."""
        return cls(
            is_acceptable=True,
            level=ModerationLevel.OK,
            severity_score=0.0,
            detected_issues=[],
            reasons=[],
            user_message=ModerationLevel.OK.description,
            analyzed_text=text,
            processing_time_ms=processing_time_ms,
            layers_used=layers_used,
        )

    @classmethod
    def cached(cls, result: "ModerationResult") -> "ModerationResult":
        """Independent copy of a stored result as served from the cache."""
        return result.model_copy(
            update={
                "processing_time_ms": 0.0,
                "layers_used": [AnalysisLayer.CACHE, *result.layers_used],
            },
            deep=True,
        )
