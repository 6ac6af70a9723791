"""
Unit tests for KeywordFilter.

Tests list parsing (comments, section markers, case folding) and the
critical-first / moderate-fallback matching policy.
"""

import pytest

from toxicity_filter.exceptions import ResourceLoadError
from toxicity_filter.keywords.keyword_filter import (
    CRITICAL_KEYWORD_SCORE,
    MODERATE_KEYWORD_SCORE,
    CriticalEntry,
    KeywordFilter,
    parse_critical_lines,
    parse_moderate_lines,
)
from toxicity_filter.models.enums import AnalysisLayer, IssueType


class TestListParsing:
    def test_critical_section_markers(self):
        entries = parse_critical_lines(
            [
                "# header",
                "alpha",
                "[hate]",
                "  Beta  ",
                "",
                "[other]",
                "gamma",
                "[hate]",
                "delta",
            ]
        )

        assert entries == [
            CriticalEntry("alpha", IssueType.CRITICAL_KEYWORD),
            CriticalEntry("beta", IssueType.HATE_SPEECH),
            CriticalEntry("gamma", IssueType.CRITICAL_KEYWORD),
            CriticalEntry("delta", IssueType.HATE_SPEECH),
        ]

    def test_moderate_list_is_ordered_and_deduplicated(self):
        keywords = parse_moderate_lines(["# c", "Zeta", "[section]", "eta", "ZETA", ""])

        assert keywords == ["zeta", "eta"]

    def test_from_files(self, keyword_filter: KeywordFilter):
        assert keyword_filter.critical_count == 4
        assert keyword_filter.moderate_count == 2

    def test_missing_file(self, fixtures_dir, tmp_path):
        with pytest.raises(ResourceLoadError):
            KeywordFilter.from_files(tmp_path / "nope.txt", fixtures_dir / "keywords_moderate.txt")


class TestCheck:
    def test_clean_text(self, keyword_filter: KeywordFilter):
        assert keyword_filter.check("have a nice day") == []

    def test_single_critical_match(self, keyword_filter: KeywordFilter):
        issues = keyword_filter.check("this has a forbiddenword in it")

        assert len(issues) == 1
        assert issues[0].type == IssueType.CRITICAL_KEYWORD
        assert issues[0].score == CRITICAL_KEYWORD_SCORE
        assert issues[0].source == AnalysisLayer.KEYWORD_FILTER

    def test_all_critical_matches_reported(self, keyword_filter: KeywordFilter):
        issues = keyword_filter.check("forbiddenword and hatefulterm and a banned phrase")

        assert sorted(issue.type.value for issue in issues) == [
            "critical_keyword",
            "critical_keyword",
            "hate_speech",
        ]

    def test_substring_containment(self, keyword_filter: KeywordFilter):
        """Matching is plain substring containment, not word boundaries."""
        issues = keyword_filter.check("xxblockedtermxx")

        assert [issue.type for issue in issues] == [IssueType.CRITICAL_KEYWORD]

    def test_moderate_fallback_single_issue(self, keyword_filter: KeywordFilter):
        issues = keyword_filter.check("mildword and annoying")

        assert len(issues) == 1
        assert issues[0].type == IssueType.CRITICAL_KEYWORD
        assert issues[0].score == MODERATE_KEYWORD_SCORE

    def test_moderate_ignored_when_critical_matches(self, keyword_filter: KeywordFilter):
        issues = keyword_filter.check("mildword with hatefulterm")

        assert len(issues) == 1
        assert issues[0].type == IssueType.HATE_SPEECH
        assert issues[0].score == CRITICAL_KEYWORD_SCORE

    def test_expects_lowercased_input(self, keyword_filter: KeywordFilter):
        """Entries are lower-cased; callers normalize the text."""
        assert keyword_filter.check("FORBIDDENWORD") == []
        assert keyword_filter.check("FORBIDDENWORD".lower()) != []

    def test_empty_lists(self):
        keyword_filter = KeywordFilter.from_lines([], [])

        assert keyword_filter.check("anything at all") == []
