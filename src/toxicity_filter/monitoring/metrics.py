"""Custom Prometheus metrics for the Toxicity Filter.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- classifier_failures_total (classifier outages mean the pipeline is failing open)
- moderation_requests_total (sudden shift in critical/unacceptable ratio)
- classifier_latency_seconds (slow model server)
"""

from prometheus_client import Counter, Histogram

# === Moderation Metrics ===

moderation_requests_total = Counter(
    "moderation_requests_total",
    "Total moderation decisions by level and acceptability",
    ["level", "acceptable"],
)
"""
Moderation decisions counter.

Labels:
- level: ok, recommendation, warning, critical
- acceptable: true, false

Used to track the share of blocked content over time.
"""

moderation_duration_seconds = Histogram(
    "moderation_duration_seconds",
    "End-to-end moderation latency in seconds (cache misses only)",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)
"""
Moderation latency histogram.

Buckets cover keyword-only runs (sub-millisecond) up to classifier runs
close to the timeout.
"""

# === Cache Metrics ===

moderation_cache_lookups_total = Counter(
    "moderation_cache_lookups_total",
    "Result cache lookups by outcome",
    ["result"],
)
"""
Result cache lookups.

Labels:
- result: hit, miss

Hit ratio = hit / (hit + miss).
"""

# === Keyword Filter Metrics ===

keyword_matches_total = Counter(
    "keyword_matches_total",
    "Keyword filter matches by tier",
    ["tier"],
)
"""
Keyword filter matches.

Labels:
- tier: critical (one increment per matched entry), moderate (at most one per text)
"""

# === Classifier Metrics ===

classifier_failures_total = Counter(
    "classifier_failures_total",
    "Classifier failures that were absorbed by failing open",
    ["error_type"],
)
"""
Classifier failures counter.

Labels:
- error_type: timeout, unavailable, connection, invalid_output, error

Every increment is a text that was judged without the classifier.

Alert thresholds:
- WARN: any sustained rate
- CRITICAL: failures > 5% of classifier calls
"""

classifier_latency_seconds = Histogram(
    "classifier_latency_seconds",
    "Classifier inference latency in seconds",
    ["success"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)
"""
Classifier inference latency histogram.

Labels:
- success: true (prediction returned), false (error raised)

Alert thresholds:
- WARN: p95 > 0.5s
- CRITICAL: p95 > 1s
"""
