"""Monitoring and metrics instrumentation for the Toxicity Filter.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from toxicity_filter.monitoring.metrics import (
    classifier_failures_total,
    classifier_latency_seconds,
    keyword_matches_total,
    moderation_cache_lookups_total,
    moderation_duration_seconds,
    moderation_requests_total,
)

__all__ = [
    "moderation_requests_total",
    "moderation_duration_seconds",
    "moderation_cache_lookups_total",
    "keyword_matches_total",
    "classifier_failures_total",
    "classifier_latency_seconds",
]
