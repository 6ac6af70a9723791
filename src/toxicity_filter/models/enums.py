"""
Enumerations for the moderation data model.

All enums are closed taxonomies - no values outside these sets are permitted.
Lookup tables keyed by these enums are expected to be total.
"""

from enum import Enum


class IssueType(str, Enum):
    """Category of a detected content issue."""

    TOXICITY = "toxicity"
    THREAT = "threat"
    INSULT = "insult"
    OBSCENITY = "obscenity"
    HATE_SPEECH = "hate_speech"
    CRITICAL_KEYWORD = "critical_keyword"

    @property
    def display_name(self) -> str:
        return _ISSUE_DISPLAY_NAMES[self]

    @property
    def help_message(self) -> str:
        """Short guidance shown to the author of flagged content."""
        return _ISSUE_HELP_MESSAGES[self]


_ISSUE_DISPLAY_NAMES: dict[IssueType, str] = {
    IssueType.TOXICITY: "Toxicity",
    IssueType.THREAT: "Threat",
    IssueType.INSULT: "Insult",
    IssueType.OBSCENITY: "Obscene Language",
    IssueType.HATE_SPEECH: "Hate Speech",
    IssueType.CRITICAL_KEYWORD: "Critical Keyword",
}

_ISSUE_HELP_MESSAGES: dict[IssueType, str] = {
    IssueType.TOXICITY: "This content appears toxic. Please be respectful.",
    IssueType.THREAT: "Threatening language is not allowed. Please revise your message.",
    IssueType.INSULT: (
        "Insulting language is not appropriate. Consider a more constructive approach."
    ),
    IssueType.OBSCENITY: "This content contains inappropriate language. Please revise.",
    IssueType.HATE_SPEECH: (
        "This content may violate community guidelines. Please be respectful."
    ),
    IssueType.CRITICAL_KEYWORD: (
        "This content contains prohibited terms. Please revise your message."
    ),
}


class AnalysisLayer(str, Enum):
    """
    Pipeline stage that produced (or served) a result.

    Layers are totally ordered by pipeline priority, not by declaration or
    insertion order: cache (0) < keyword_filter (1) < classifier (2).
    """

    CACHE = "cache"
    KEYWORD_FILTER = "keyword_filter"
    CLASSIFIER = "classifier"

    @property
    def priority(self) -> int:
        """Pipeline priority (0=cache, 1=keyword_filter, 2=classifier)."""
        order = [AnalysisLayer.CACHE, AnalysisLayer.KEYWORD_FILTER, AnalysisLayer.CLASSIFIER]
        return order.index(self)


class ModerationLevel(str, Enum):
    """
    Moderation severity level.

    Ordered from ok to critical. Derived from the severity score and the
    detected issues (see pipeline.aggregation.determine_level).
    """

    OK = "ok"
    RECOMMENDATION = "recommendation"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def description(self) -> str:
        """User-facing description of the level."""
        return _LEVEL_DESCRIPTIONS[self]

    @property
    def severity_range(self) -> tuple[float, float]:
        """Nominal (low, high) severity range covered by this level."""
        return _LEVEL_RANGES[self]


_LEVEL_DESCRIPTIONS: dict[ModerationLevel, str] = {
    ModerationLevel.OK: "Content is acceptable",
    ModerationLevel.RECOMMENDATION: "Consider rephrasing your text",
    ModerationLevel.WARNING: "Your content may contain inappropriate elements",
    ModerationLevel.CRITICAL: "This content is not allowed",
}

_LEVEL_RANGES: dict[ModerationLevel, tuple[float, float]] = {
    ModerationLevel.OK: (0.0, 0.3),
    ModerationLevel.RECOMMENDATION: (0.3, 0.6),
    ModerationLevel.WARNING: (0.6, 0.85),
    ModerationLevel.CRITICAL: (0.85, 1.0),
}


class ReasonCategory(str, Enum):
    """Human-facing reason categories, mapped 1:1 from issue types."""

    HATE_SPEECH = "hate_speech"
    OFFENSIVE_LANGUAGE = "offensive_language"
    THREATS = "threats"
    TOXICITY = "toxicity"
    CRITICAL_KEYWORDS = "critical_keywords"

    @property
    def display_name(self) -> str:
        return _REASON_DISPLAY_NAMES[self]

    @classmethod
    def from_issue_type(cls, issue_type: IssueType) -> "ReasonCategory":
        return _ISSUE_TO_REASON[issue_type]


_REASON_DISPLAY_NAMES: dict[ReasonCategory, str] = {
    ReasonCategory.HATE_SPEECH: "hate speech",
    ReasonCategory.OFFENSIVE_LANGUAGE: "offensive language",
    ReasonCategory.THREATS: "threatening language",
    ReasonCategory.TOXICITY: "toxic content",
    ReasonCategory.CRITICAL_KEYWORDS: "prohibited terms",
}

_ISSUE_TO_REASON: dict[IssueType, ReasonCategory] = {
    IssueType.TOXICITY: ReasonCategory.TOXICITY,
    IssueType.THREAT: ReasonCategory.THREATS,
    IssueType.INSULT: ReasonCategory.OFFENSIVE_LANGUAGE,
    IssueType.OBSCENITY: ReasonCategory.OFFENSIVE_LANGUAGE,
    IssueType.HATE_SPEECH: ReasonCategory.HATE_SPEECH,
    IssueType.CRITICAL_KEYWORD: ReasonCategory.CRITICAL_KEYWORDS,
}


class PipelineMode(str, Enum):
    """Which layers the moderator runs after the cache lookup."""

    CLASSIFIER_ONLY = "classifier_only"
    CLASSIFIER_WITH_KEYWORDS = "classifier_with_keywords"
    KEYWORDS_ONLY = "keywords_only"

    @property
    def runs_keywords(self) -> bool:
        return self is not PipelineMode.CLASSIFIER_ONLY

    @property
    def runs_classifier(self) -> bool:
        return self is not PipelineMode.KEYWORDS_ONLY


class ToxicityLabel(str, Enum):
    """
    Output labels of the toxicity classifier.

    Declaration order matches the index order of the model's probability
    vector (toxic-bert): 0=toxic ... 5=identity_hate.
    """

    TOXIC = "toxic"
    SEVERE_TOXIC = "severe_toxic"
    OBSCENE = "obscene"
    THREAT = "threat"
    INSULT = "insult"
    IDENTITY_HATE = "identity_hate"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def issue_type(self) -> IssueType:
        """Issue type reported when this label crosses the threshold."""
        return _LABEL_TO_ISSUE[self]


_LABEL_TO_ISSUE: dict[ToxicityLabel, IssueType] = {
    ToxicityLabel.TOXIC: IssueType.TOXICITY,
    ToxicityLabel.SEVERE_TOXIC: IssueType.TOXICITY,
    ToxicityLabel.OBSCENE: IssueType.OBSCENITY,
    ToxicityLabel.THREAT: IssueType.THREAT,
    ToxicityLabel.INSULT: IssueType.INSULT,
    ToxicityLabel.IDENTITY_HATE: IssueType.HATE_SPEECH,
}
