"""
Heuristic Analyzer

Applies fixed path and size rules to changed files when no generative
backend is used.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

from ..models.pr_diff import FileChange, PRReference
from ..models.review import AnalysisResult, ReviewComment


logger = logging.getLogger(__name__)

LARGE_DIFF_CHARS = 2000


class RuleType(Enum):
    """Heuristic rule identifiers."""
    LARGE_DIFF = "large_diff"
    CONFIG_MODIFIED = "config_modified"
    TEST_DELETED = "test_deleted"
    SECURITY_SENSITIVE = "security_sensitive"


@dataclass(frozen=True)
class HeuristicRule:
    """A single per-file rule and the comment it produces."""
    rule_type: RuleType
    message: str
    matches: Callable[[FileChange], bool]


def _is_large_diff(file_change: FileChange) -> bool:
    return file_change.patch_length > LARGE_DIFF_CHARS


def _is_modified_config(file_change: FileChange) -> bool:
    return file_change.status == "modified" and "config" in file_change.path.lower()


def _is_deleted_test(file_change: FileChange) -> bool:
    return "test" in file_change.path.lower() and file_change.status == "removed"


def _is_security_sensitive(file_change: FileChange) -> bool:
    path = file_change.path.lower()
    return "auth" in path or "secret" in path


DEFAULT_RULES = (
    HeuristicRule(
        RuleType.LARGE_DIFF,
        "Large diff detected. Consider breaking changes into smaller commits for easier review.",
        _is_large_diff,
    ),
    HeuristicRule(
        RuleType.CONFIG_MODIFIED,
        "Configuration file modified. Ensure environment-specific values are documented "
        "and secrets are not committed.",
        _is_modified_config,
    ),
    HeuristicRule(
        RuleType.TEST_DELETED,
        "Test file deleted. Confirm the covered behavior is still tested elsewhere.",
        _is_deleted_test,
    ),
    HeuristicRule(
        RuleType.SECURITY_SENSITIVE,
        "Security-sensitive file modified. Request a review from someone familiar with "
        "authentication and secret handling.",
        _is_security_sensitive,
    ),
)


class HeuristicAnalyzer:
    """
    Rule-based PR analyzer.

    Every rule is evaluated against every file; a file can produce
    several comments. Comment order follows file order, then rule order.
    """

    def __init__(self, rules=DEFAULT_RULES):
        self.rules = tuple(rules)

    def review_files(self, files: List[FileChange]) -> List[ReviewComment]:
        """
        Apply all rules to the changed files.

        Args:
            files: Changed files in API order

        Returns:
            Review comments for every rule match
        """
        comments = []
        for file_change in files:
            for rule in self.rules:
                if rule.matches(file_change):
                    logger.debug(f"Rule {rule.rule_type.value} matched {file_change.path}")
                    comments.append(ReviewComment(path=file_change.path, body=rule.message))
        return comments

    def analyze(self, pr_ref: PRReference, files: List[FileChange]) -> AnalysisResult:
        """Run the rules and build the templated summary."""
        comments = self.review_files(files)
        summary = f"Automated PR analysis found {len(comments)} suggestion(s) for {pr_ref}."
        logger.info(f"Heuristic analysis of {pr_ref}: {len(comments)} suggestion(s)")
        return AnalysisResult(summary=summary, comments=comments)
