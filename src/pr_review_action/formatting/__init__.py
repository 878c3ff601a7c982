"""
Review Formatter

This module provides formatting of analysis results into
GitHub PR comment and review bodies.
"""

from .github import GitHubCommentFormatter

__all__ = ['GitHubCommentFormatter']
