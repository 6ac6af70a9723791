"""
Unit tests for enum lookup tables.

Every enum-keyed table must be total so a new member cannot silently
fall through.
"""

import pytest

from toxicity_filter.models.enums import (
    AnalysisLayer,
    IssueType,
    ModerationLevel,
    PipelineMode,
    ReasonCategory,
    ToxicityLabel,
)


class TestIssueType:
    @pytest.mark.parametrize("issue_type", list(IssueType))
    def test_display_name_and_help_defined(self, issue_type: IssueType):
        assert issue_type.display_name
        assert issue_type.help_message

    def test_display_name(self):
        assert IssueType.HATE_SPEECH.display_name == "Hate Speech"


class TestReasonCategory:
    @pytest.mark.parametrize(
        "issue_type,expected",
        [
            (IssueType.TOXICITY, ReasonCategory.TOXICITY),
            (IssueType.THREAT, ReasonCategory.THREATS),
            (IssueType.INSULT, ReasonCategory.OFFENSIVE_LANGUAGE),
            (IssueType.OBSCENITY, ReasonCategory.OFFENSIVE_LANGUAGE),
            (IssueType.HATE_SPEECH, ReasonCategory.HATE_SPEECH),
            (IssueType.CRITICAL_KEYWORD, ReasonCategory.CRITICAL_KEYWORDS),
        ],
    )
    def test_from_issue_type(self, issue_type: IssueType, expected: ReasonCategory):
        assert ReasonCategory.from_issue_type(issue_type) == expected

    @pytest.mark.parametrize("category", list(ReasonCategory))
    def test_display_name_defined(self, category: ReasonCategory):
        assert category.display_name


class TestToxicityLabel:
    def test_model_output_order(self):
        assert [label.value for label in ToxicityLabel] == [
            "toxic",
            "severe_toxic",
            "obscene",
            "threat",
            "insult",
            "identity_hate",
        ]

    @pytest.mark.parametrize(
        "label,expected",
        [
            (ToxicityLabel.TOXIC, IssueType.TOXICITY),
            (ToxicityLabel.SEVERE_TOXIC, IssueType.TOXICITY),
            (ToxicityLabel.OBSCENE, IssueType.OBSCENITY),
            (ToxicityLabel.THREAT, IssueType.THREAT),
            (ToxicityLabel.INSULT, IssueType.INSULT),
            (ToxicityLabel.IDENTITY_HATE, IssueType.HATE_SPEECH),
        ],
    )
    def test_issue_type_mapping(self, label: ToxicityLabel, expected: IssueType):
        assert label.issue_type == expected

    def test_display_name(self):
        assert ToxicityLabel.IDENTITY_HATE.display_name == "Identity Hate"


class TestAnalysisLayer:
    def test_priority_order(self):
        assert AnalysisLayer.CACHE.priority == 0
        assert AnalysisLayer.KEYWORD_FILTER.priority == 1
        assert AnalysisLayer.CLASSIFIER.priority == 2


class TestModerationLevel:
    @pytest.mark.parametrize("level", list(ModerationLevel))
    def test_description_and_range(self, level: ModerationLevel):
        low, high = level.severity_range
        assert level.description
        assert 0.0 <= low < high <= 1.0

    def test_ranges_are_contiguous(self):
        ranges = [level.severity_range for level in ModerationLevel]

        assert ranges[0][0] == 0.0
        assert ranges[-1][1] == 1.0
        assert all(ranges[i][1] == ranges[i + 1][0] for i in range(len(ranges) - 1))


class TestPipelineMode:
    @pytest.mark.parametrize(
        "mode,keywords,classifier",
        [
            (PipelineMode.CLASSIFIER_ONLY, False, True),
            (PipelineMode.CLASSIFIER_WITH_KEYWORDS, True, True),
            (PipelineMode.KEYWORDS_ONLY, True, False),
        ],
    )
    def test_stage_flags(self, mode: PipelineMode, keywords: bool, classifier: bool):
        assert mode.runs_keywords is keywords
        assert mode.runs_classifier is classifier
