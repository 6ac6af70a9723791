"""
Aggregation of layer issues into a single moderation decision.

Pure functions of the accumulated issue list and a SeverityPolicy:
- compute_severity: worst weighted issue score, capped at 1.0
- is_acceptable: threshold / keyword-block rejection rules
- determine_level: severity bands, with critical keywords forcing CRITICAL
- issues_to_reasons / generate_user_message: user-facing explanation

Policy constants are values, not algorithm: a moderator can be built with a
custom SeverityPolicy to audit or tune them in isolation.
"""

from pydantic import BaseModel, ConfigDict, Field

from toxicity_filter.models.enums import (
    AnalysisLayer,
    IssueType,
    ModerationLevel,
    ReasonCategory,
)
from toxicity_filter.models.moderation_models import Issue, ModerationReason, ModerationResult

DEFAULT_ISSUE_WEIGHTS: dict[IssueType, float] = {
    IssueType.TOXICITY: 1.5,
    IssueType.THREAT: 2.0,
    IssueType.INSULT: 1.0,
    IssueType.OBSCENITY: 1.0,
    IssueType.HATE_SPEECH: 1.8,
    IssueType.CRITICAL_KEYWORD: 2.5,
}

# Issue types whose raw score alone can reject content at the toxicity threshold
DEFAULT_BLOCKING_TYPES: frozenset[IssueType] = frozenset(
    {
        IssueType.THREAT,
        IssueType.HATE_SPEECH,
        IssueType.CRITICAL_KEYWORD,
        IssueType.TOXICITY,
    }
)


class SeverityPolicy(BaseModel):
    """Weights and thresholds used to turn issues into a decision."""

    model_config = ConfigDict(frozen=True)

    issue_weights: dict[IssueType, float] = Field(
        default_factory=lambda: dict(DEFAULT_ISSUE_WEIGHTS),
        description="Severity multiplier per issue type",
    )
    default_weight: float = Field(
        default=1.0, ge=0.0, description="Weight for issue types missing from issue_weights"
    )
    blocking_types: frozenset[IssueType] = Field(default=DEFAULT_BLOCKING_TYPES)
    keyword_block_score: float = Field(
        default=0.70,
        ge=0.0,
        le=1.0,
        description="Keyword-filter issues at or above this raw score always reject",
    )
    critical_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    warning_threshold: float = Field(default=0.60, ge=0.0, le=1.0)
    recommendation_threshold: float = Field(default=0.30, ge=0.0, le=1.0)

    def weight_for(self, issue_type: IssueType) -> float:
        return self.issue_weights.get(issue_type, self.default_weight)


DEFAULT_POLICY = SeverityPolicy()


def compute_severity(issues: list[Issue], policy: SeverityPolicy = DEFAULT_POLICY) -> float:
    """Maximum weighted issue score, capped to 1.0 (0.0 with no issues)."""
    if not issues:
        return 0.0
    weighted = max(issue.score * policy.weight_for(issue.type) for issue in issues)
    return min(weighted, 1.0)


def is_acceptable(
    issues: list[Issue], toxicity_threshold: float, policy: SeverityPolicy = DEFAULT_POLICY
) -> bool:
    """
    Decide acceptability.

    Rejected if a blocking-type issue reaches the toxicity threshold, or if a
    keyword-filter issue reaches the keyword block score. Comparisons use raw
    (unweighted) scores.
    """
    for issue in issues:
        if issue.type in policy.blocking_types and issue.score >= toxicity_threshold:
            return False
        if (
            issue.source == AnalysisLayer.KEYWORD_FILTER
            and issue.score >= policy.keyword_block_score
        ):
            return False
    return True


def determine_level(
    severity_score: float, issues: list[Issue], policy: SeverityPolicy = DEFAULT_POLICY
) -> ModerationLevel:
    if any(issue.type == IssueType.CRITICAL_KEYWORD for issue in issues):
        return ModerationLevel.CRITICAL
    if severity_score >= policy.critical_threshold:
        return ModerationLevel.CRITICAL
    if severity_score >= policy.warning_threshold:
        return ModerationLevel.WARNING
    if severity_score >= policy.recommendation_threshold:
        return ModerationLevel.RECOMMENDATION
    return ModerationLevel.OK


def issues_to_reasons(issues: list[Issue]) -> list[ModerationReason]:
    """One reason per issue, in issue order."""
    return [
        ModerationReason(
            category=ReasonCategory.from_issue_type(issue.type),
            confidence=issue.score,
            source=issue.source,
        )
        for issue in issues
    ]


def generate_user_message(level: ModerationLevel, reasons: list[ModerationReason]) -> str:
    """
    Select the user-facing message for a level.

    Falls back to the level description when there are no reasons to list.
    """
    if level == ModerationLevel.OK:
        return ModerationLevel.OK.description
    if not reasons:
        return level.description

    reason_list = ", ".join(reason.description for reason in reasons)
    if level == ModerationLevel.RECOMMENDATION:
        return f"We detected: {reason_list}. Consider rephrasing your text"
    if level == ModerationLevel.WARNING:
        return f"We believe your text contains {reason_list}. Please try to change the text"
    return f"This is not allowed because: {reason_list}"


def build_result(
    text: str,
    issues: list[Issue],
    layers_used: list[AnalysisLayer],
    toxicity_threshold: float,
    processing_time_ms: float,
    policy: SeverityPolicy = DEFAULT_POLICY,
) -> ModerationResult:
    """Assemble a ModerationResult from the issues gathered by the pipeline."""
    severity_score = compute_severity(issues, policy)
    level = determine_level(severity_score, issues, policy)
    reasons = issues_to_reasons(issues)

    return ModerationResult(
        is_acceptable=is_acceptable(issues, toxicity_threshold, policy),
        level=level,
        severity_score=severity_score,
        detected_issues=list(issues),
        reasons=reasons,
        user_message=generate_user_message(level, reasons),
        analyzed_text=text,
        processing_time_ms=processing_time_ms,
        layers_used=list(layers_used),
    )
