"""
FastAPI application entry point for the Toxicity Filter service.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from toxicity_filter import __version__
from toxicity_filter.api.dependencies import get_moderator
from toxicity_filter.api.error_handlers import EXCEPTION_HANDLERS
from toxicity_filter.api.middleware import RequestTracingMiddleware
from toxicity_filter.api.routes import router
from toxicity_filter.config import settings
from toxicity_filter.logging_config import configure_logging

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Layered content moderation: result cache, keyword filter and toxicity classifier",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["moderation"])


@app.on_event("startup")
async def startup():
    """Build the moderator eagerly so missing resources fail startup, not requests."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        preset=settings.MODERATION_PRESET,
        classifier_url=settings.CLASSIFIER_URL or None,
    )

    moderator = get_moderator()

    if moderator.config.pipeline_mode.runs_classifier:
        if await moderator.classifier.health_check():
            logger.info("Classifier reachable", classifier=repr(moderator.classifier))
        else:
            logger.warning(
                "Classifier not reachable, decisions will fail open",
                classifier=repr(moderator.classifier),
            )

    logger.info("Application startup complete", moderator=repr(moderator))


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close classifier connections."""
    logger.info("Application shutdown")
    await get_moderator().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "toxicity_filter.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
