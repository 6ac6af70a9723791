"""
Base exceptions shared across the toxicity filter.

Construction-time failures (missing resources, malformed vocabularies) derive
from ToxicityFilterError and are surfaced to the caller before any analysis
happens. Per-request failures inside `ContentModerator.analyze` are never
raised to the caller.
"""

from typing import Any


class ToxicityFilterError(Exception):
    """
    Base exception for all toxicity filter errors.

    Carries a structured `details` dict for logging alongside the message.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ResourceLoadError(ToxicityFilterError):
    """
    Raised when a resource file (vocabulary, special tokens, keyword list)
    is missing or unreadable.
    """

    def __init__(self, message: str, path: str | None = None, reason: str | None = None):
        details: dict[str, Any] = {}
        if path:
            details["path"] = path
        if reason:
            details["reason"] = reason
        super().__init__(message, details)
