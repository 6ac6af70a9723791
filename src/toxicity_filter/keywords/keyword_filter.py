"""
Two-tier lexical keyword filter.

Critical entries each raise an issue on substring match. Moderate keywords are
a fallback: consulted only when no critical entry matched, and at most one
issue is raised for them.

List format (both tiers):
- blank lines and lines starting with `#` are ignored
- lines starting with `[` are section markers; in the critical list `[hate]`
  tags subsequent entries as hate speech, any other marker resets to the
  default critical-keyword tag
- every other line is a keyword literal (lower-cased)
"""

from pathlib import Path
from typing import Iterable, NamedTuple

import structlog

from toxicity_filter.models.enums import AnalysisLayer, IssueType
from toxicity_filter.models.moderation_models import Issue
from toxicity_filter.monitoring.metrics import keyword_matches_total
from toxicity_filter.resources import read_resource_lines

logger = structlog.get_logger(__name__)

CRITICAL_KEYWORD_SCORE = 0.70
MODERATE_KEYWORD_SCORE = 0.50
HATE_SECTION_MARKER = "[hate]"


class CriticalEntry(NamedTuple):
    keyword: str
    issue_type: IssueType


def parse_critical_lines(lines: Iterable[str]) -> list[CriticalEntry]:
    """Parse the critical list, applying section markers in order."""
    entries: list[CriticalEntry] = []
    current_type = IssueType.CRITICAL_KEYWORD

    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if stripped == HATE_SECTION_MARKER:
            current_type = IssueType.HATE_SPEECH
        elif stripped.startswith("["):
            current_type = IssueType.CRITICAL_KEYWORD
        else:
            entries.append(CriticalEntry(stripped.lower(), current_type))

    return entries


def parse_moderate_lines(lines: Iterable[str]) -> list[str]:
    """Parse the moderate list into ordered, de-duplicated keywords."""
    keywords: dict[str, None] = {}
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "[")):
            continue
        keywords[stripped.lower()] = None
    return list(keywords)


class KeywordFilter:
    """
    Case-insensitive substring keyword matcher.

    Immutable after construction; `check` is pure and safe to call
    concurrently without locking.
    """

    def __init__(self, critical_entries: Iterable[CriticalEntry], moderate_keywords: Iterable[str]):
        self._critical: tuple[CriticalEntry, ...] = tuple(critical_entries)
        self._moderate: tuple[str, ...] = tuple(moderate_keywords)

    @classmethod
    def from_lines(
        cls, critical_lines: Iterable[str], moderate_lines: Iterable[str]
    ) -> "KeywordFilter":
        return cls(parse_critical_lines(critical_lines), parse_moderate_lines(moderate_lines))

    @classmethod
    def from_files(cls, critical_path: str | Path, moderate_path: str | Path) -> "KeywordFilter":
        """
        Load both keyword tiers from disk.

        Raises:
            ResourceLoadError: Either list missing or unreadable
        """
        keyword_filter = cls.from_lines(
            read_resource_lines(critical_path), read_resource_lines(moderate_path)
        )
        logger.info(
            "Keyword lists loaded",
            critical_path=str(critical_path),
            moderate_path=str(moderate_path),
            critical_count=keyword_filter.critical_count,
            moderate_count=keyword_filter.moderate_count,
        )
        return keyword_filter

    @property
    def critical_count(self) -> int:
        return len(self._critical)

    @property
    def moderate_count(self) -> int:
        return len(self._moderate)

    def check(self, normalized_text: str) -> list[Issue]:
        """
        Match keywords against already lower-cased text.

        Args:
            normalized_text: Trimmed, lower-cased input

        Returns:
            One issue per critical match, else at most one moderate issue,
            else an empty list
        """
        issues = [
            Issue(type=entry.issue_type, score=CRITICAL_KEYWORD_SCORE, source=AnalysisLayer.KEYWORD_FILTER)
            for entry in self._critical
            if entry.keyword in normalized_text
        ]
        if issues:
            keyword_matches_total.labels(tier="critical").inc(len(issues))
            logger.debug("Critical keywords matched", match_count=len(issues))
            return issues

        for keyword in self._moderate:
            if keyword in normalized_text:
                keyword_matches_total.labels(tier="moderate").inc()
                logger.debug("Moderate keyword matched")
                return [
                    Issue(
                        type=IssueType.CRITICAL_KEYWORD,
                        score=MODERATE_KEYWORD_SCORE,
                        source=AnalysisLayer.KEYWORD_FILTER,
                    )
                ]

        return []
