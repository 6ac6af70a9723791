"""
API routes for content moderation.

- POST /moderate: full moderation result
- POST /moderate/check: allow/deny with rejection reason
- POST /moderate/batch: allow/deny for several texts
- GET /cache/stats, DELETE /cache: result cache management
- GET /health: classifier and cache status
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from toxicity_filter.api.dependencies import get_batch_limit, get_moderator, get_settings
from toxicity_filter.api.models import (
    BatchModerateRequest,
    BatchModerateResponse,
    CacheStatsResponse,
    CheckResponse,
    HealthResponse,
    ModerateRequest,
    ModerateResponse,
)
from toxicity_filter.config import Settings
from toxicity_filter.pipeline.moderator import ContentModerator

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/moderate",
    response_model=ModerateResponse,
    status_code=status.HTTP_200_OK,
    summary="Moderate a single text",
    description="""
    Run the moderation pipeline (cache, keyword filter, classifier) on one text.

    Always returns a decision: classifier failures degrade to keyword-only
    analysis instead of failing the request.
    """,
    responses={
        200: {"description": "Moderation completed"},
        400: {"description": "Invalid request format"},
    },
)
async def moderate(
    request: ModerateRequest,
    moderator: ContentModerator = Depends(get_moderator),
) -> ModerateResponse:
    result = await moderator.analyze(request.text)
    return ModerateResponse.from_result(result)


@router.post(
    "/moderate/check",
    response_model=CheckResponse,
    summary="Quick allow/deny check",
)
async def check(
    request: ModerateRequest,
    moderator: ContentModerator = Depends(get_moderator),
) -> CheckResponse:
    is_safe, reason = await moderator.check(request.text)
    return CheckResponse(is_safe=is_safe, reason=reason)


@router.post(
    "/moderate/batch",
    response_model=BatchModerateResponse,
    summary="Check several texts",
    description="""
    Check each text in order. The number of texts is limited by
    BATCH_MAX_TEXTS.
    """,
    responses={
        200: {"description": "All texts checked"},
        413: {"description": "Too many texts in one batch"},
    },
)
async def moderate_batch(
    request: BatchModerateRequest,
    moderator: ContentModerator = Depends(get_moderator),
    batch_limit: int = Depends(get_batch_limit),
) -> BatchModerateResponse:
    if len(request.texts) > batch_limit:
        logger.warning(
            "Batch too large", text_count=len(request.texts), batch_limit=batch_limit
        )
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Batch contains {len(request.texts)} texts, maximum is {batch_limit}",
        )

    results = await moderator.is_safe_batch(request.texts)
    logger.info(
        "Batch moderated",
        text_count=len(results),
        rejected_count=results.count(False),
    )
    return BatchModerateResponse(count=len(results), results=results)


@router.get(
    "/cache/stats",
    response_model=CacheStatsResponse,
    summary="Result cache statistics",
)
async def cache_stats(
    moderator: ContentModerator = Depends(get_moderator),
) -> CacheStatsResponse:
    return CacheStatsResponse.from_statistics(moderator.cache_statistics())


@router.delete(
    "/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear the result cache",
)
async def clear_cache(
    moderator: ContentModerator = Depends(get_moderator),
) -> None:
    moderator.clear_cache()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Report classifier reachability and result cache occupancy.

    The service stays up when the classifier is down (moderation fails open
    to the keyword filter), so an unreachable classifier is reported as
    "degraded" rather than unhealthy.
    """,
)
async def health_check(
    moderator: ContentModerator = Depends(get_moderator),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    services = {"keyword_filter": "ok"}

    classifier = moderator.classifier
    if not classifier.is_model_available:
        services["classifier"] = "not_configured"
    elif await classifier.health_check():
        services["classifier"] = "ok"
    else:
        services["classifier"] = "unreachable"

    classifier_needed = moderator.config.pipeline_mode.runs_classifier
    health_status = (
        "degraded" if classifier_needed and services["classifier"] != "ok" else "healthy"
    )

    logger.info("Health check", status=health_status, services=services)

    return HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        pipeline_mode=moderator.config.pipeline_mode.value,
        services=services,
        cache=CacheStatsResponse.from_statistics(moderator.cache_statistics()),
    )
