"""
Context Builder

Builds the bounded text payload sent to the review backend by combining
PR header information with per-file change sections.
"""

import logging
from typing import List, Optional

from ..models.pr_diff import FileChange, PullRequestInfo


logger = logging.getLogger(__name__)

MAX_PATCH_CHARS = 5000
TRUNCATION_MARKER = "\n... (truncated)"


def truncate_patch(patch: str, limit: int = MAX_PATCH_CHARS) -> str:
    """Cut a patch to ``limit`` characters and append the truncation marker."""
    if len(patch) > limit:
        return patch[:limit] + TRUNCATION_MARKER
    return patch


class ContextBuilder:
    """
    Builds the PR analysis context.

    Paths, titles, descriptions and patches are inserted verbatim; only
    patch length is bounded.
    """

    def __init__(self, max_patch_chars: int = MAX_PATCH_CHARS):
        """
        Initialize context builder.

        Args:
            max_patch_chars: Patch length above which a patch is truncated
        """
        self.max_patch_chars = max_patch_chars

    def build_context(self, pr: PullRequestInfo, files: List[FileChange]) -> str:
        """
        Build context text for a pull request.

        Args:
            pr: Parsed PR header information
            files: Changed files in API order

        Returns:
            Markdown context blob
        """
        parts = [self._build_header(pr)]
        parts.append(f"## Files Changed ({len(files)} files)\n\n")

        truncated = 0
        for file_change in files:
            section, was_truncated = self._build_file_section(file_change)
            parts.append(section)
            truncated += was_truncated

        context = "".join(parts)
        logger.info(
            f"Built context for PR #{pr.number}: {len(files)} files, "
            f"{truncated} truncated patches, {len(context)} chars"
        )
        return context

    def _build_header(self, pr: PullRequestInfo) -> str:
        header = "# Pull Request Analysis Request\n\n"
        header += "## PR Information\n"
        header += f"- **Title**: {pr.title}\n"
        header += f"- **Number**: #{pr.number}\n"
        header += f"- **Author**: {self._display(pr.author)}\n"
        header += f"- **State**: {pr.state}\n"
        header += f"- **Base Branch**: {pr.base_ref} ← **Head Branch**: {pr.head_ref}\n\n"

        if pr.body:
            header += f"## PR Description\n{pr.body}\n\n"

        return header

    def _build_file_section(self, file_change: FileChange):
        section = f"### {file_change.path} ({file_change.status})\n"
        section += f"- **Additions**: +{file_change.additions}\n"
        section += f"- **Deletions**: -{file_change.deletions}\n"
        section += f"- **Changes**: {file_change.changes} lines\n"

        was_truncated = False
        if file_change.has_patch:
            patch = truncate_patch(file_change.patch, self.max_patch_chars)
            was_truncated = len(file_change.patch) > self.max_patch_chars
            section += f"\n```diff\n{patch}\n```\n"

        section += "\n"
        return section, was_truncated

    @staticmethod
    def _display(value: Optional[str]) -> str:
        return value if value is not None else "unknown"
