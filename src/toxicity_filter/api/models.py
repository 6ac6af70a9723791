"""
API-specific request and response models for FastAPI endpoints.

These models wrap the core domain models (ModerationResult, Issue)
with API-specific metadata and status information.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from toxicity_filter.cache.lru_cache import CacheStatistics
from toxicity_filter.models.moderation_models import Issue, ModerationResult

MAX_TEXT_LENGTH = 10_000

ModeratedText = Annotated[str, Field(max_length=MAX_TEXT_LENGTH)]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ModerateRequest(BaseModel):
    """Request for single-text moderation."""

    text: str = Field(
        description="Text to moderate (may be empty)",
        max_length=MAX_TEXT_LENGTH,
        examples=["Have a nice day!"],
    )


class ModerateResponse(BaseModel):
    """Full moderation result plus derived convenience fields."""

    result: ModerationResult = Field(description="Moderation decision")
    was_cached: bool = Field(description="True if served from the result cache")
    summary: str = Field(description="One-line summary of the decision")
    primary_issue: Optional[Issue] = Field(
        default=None, description="Highest-scoring issue, if any"
    )

    @classmethod
    def from_result(cls, result: ModerationResult) -> "ModerateResponse":
        return cls(
            result=result,
            was_cached=result.was_cached,
            summary=result.summary,
            primary_issue=result.primary_issue,
        )


class CheckResponse(BaseModel):
    """Response for the quick check endpoint."""

    is_safe: bool = Field(description="Overall allow/deny decision")
    reason: Optional[str] = Field(
        default=None, description="User message, present only when rejected"
    )


class BatchModerateRequest(BaseModel):
    """Request for batch moderation."""

    texts: list[ModeratedText] = Field(
        description="Texts to check, processed in order (same length limit as /moderate)",
        min_length=1,
    )


class BatchModerateResponse(BaseModel):
    """Response for batch moderation (one flag per input text, same order)."""

    count: int = Field(ge=0, description="Number of texts checked")
    results: list[bool] = Field(description="is_safe per input text")


class CacheStatsResponse(BaseModel):
    """Result cache occupancy."""

    capacity: int = Field(gt=0)
    count: int = Field(ge=0)
    utilization: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_statistics(cls, stats: CacheStatistics) -> "CacheStatsResponse":
        return cls(capacity=stats.capacity, count=stats.count, utilization=stats.utilization)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded"],
    )
    version: str = Field(description="Service version", examples=["0.1.0"])
    pipeline_mode: str = Field(description="Active pipeline mode")
    services: dict[str, str] = Field(
        description="Component-specific health status",
        examples=[{"classifier": "ok", "keyword_filter": "ok"}],
    )
    cache: CacheStatsResponse = Field(description="Result cache occupancy")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp (UTC)")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error code or type",
        examples=["invalid_request", "resource_unavailable", "internal_error"],
    )
    message: str = Field(description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp (UTC)")
