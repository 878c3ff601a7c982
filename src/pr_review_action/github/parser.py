"""
PR Diff Parser

Parses GitHub pull request responses into the structured models
used by the context builder and the heuristic rules.
"""

import logging
from typing import Dict, List

from ..models.pr_diff import FileChange, PullRequestInfo


logger = logging.getLogger(__name__)


class PRDiffParser:
    """
    Parser for GitHub PR data.

    Converts GitHub API responses into PullRequestInfo and FileChange
    objects. File status and patch text are kept verbatim.
    """

    def parse_pull_request(self, pr_data: Dict) -> PullRequestInfo:
        """
        Parse PR header data.

        Args:
            pr_data: PR information from GitHub API

        Returns:
            Structured PullRequestInfo object
        """
        logger.info(f"Parsing PR #{pr_data.get('number')}")

        user = pr_data.get('user') or {}
        return PullRequestInfo(
            number=pr_data['number'],
            title=pr_data.get('title', ''),
            author=user.get('login'),
            state=pr_data.get('state', ''),
            base_ref=(pr_data.get('base') or {}).get('ref', ''),
            head_ref=(pr_data.get('head') or {}).get('ref', ''),
            body=pr_data.get('body')
        )

    def parse_files(self, files_data: List[Dict]) -> List[FileChange]:
        """
        Parse changed-file list.

        Args:
            files_data: List of file changes from GitHub API

        Returns:
            List of FileChange objects in API order
        """
        files = [self._parse_file_change(file_data) for file_data in files_data]

        total_additions = sum(f.additions for f in files)
        total_deletions = sum(f.deletions for f in files)
        logger.info(f"Parsed {len(files)} files, +{total_additions}/-{total_deletions}")
        return files

    def _parse_file_change(self, file_data: Dict) -> FileChange:
        """Parse individual file change data."""
        file_path = file_data['filename']
        logger.debug(f"Parsing file change: {file_path}")

        return FileChange(
            path=file_path,
            status=file_data.get('status', 'modified'),
            additions=file_data.get('additions', 0),
            deletions=file_data.get('deletions', 0),
            changes=file_data.get('changes', 0),
            patch=file_data.get('patch')
        )
