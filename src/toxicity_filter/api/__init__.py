"""
FastAPI API routes and endpoints.

- routes.py: moderation, cache and health endpoints
- dependencies.py: singleton tokenizer, keyword filter, classifier and moderator
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: request tracing
"""

from toxicity_filter.api import dependencies, error_handlers, models
from toxicity_filter.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
