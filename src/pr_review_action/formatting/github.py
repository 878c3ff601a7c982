"""
GitHub Comment Formatter

Formats analysis results into the bodies posted on the pull request.
"""

import logging
from typing import List

from ..models.review import AnalysisResult, ReviewComment


logger = logging.getLogger(__name__)


class GitHubCommentFormatter:
    """
    Formats analysis results for GitHub.

    The summary is posted as-is; per-file comments are aggregated into
    one review body.
    """

    def __init__(self, separator: str = "\n\n"):
        self.separator = separator

    def format_summary(self, result: AnalysisResult) -> str:
        """Body of the top-level issue comment."""
        return result.summary

    def format_review_body(self, comments: List[ReviewComment]) -> str:
        """
        Aggregate per-file comments into a single review body.

        Args:
            comments: Comments in analyzer order

        Returns:
            "**path**: body" entries joined by a blank line
        """
        body = self.separator.join(comment.to_review_line() for comment in comments)
        logger.debug(f"Formatted review body: {len(comments)} entries, {len(body)} chars")
        return body
