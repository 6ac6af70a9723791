"""
Moderation decision pipeline.

- aggregation.py: SeverityPolicy and pure issue -> decision functions
- moderator.py: ContentModerator orchestrating cache, keywords and classifier
"""

from toxicity_filter.pipeline.aggregation import (
    DEFAULT_POLICY,
    SeverityPolicy,
    build_result,
    compute_severity,
    determine_level,
    generate_user_message,
    is_acceptable,
    issues_to_reasons,
)
from toxicity_filter.pipeline.moderator import ContentModerator, normalize_text

__all__ = [
    "ContentModerator",
    "normalize_text",
    "SeverityPolicy",
    "DEFAULT_POLICY",
    "build_result",
    "compute_severity",
    "determine_level",
    "generate_user_message",
    "is_acceptable",
    "issues_to_reasons",
]
