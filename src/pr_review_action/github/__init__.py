"""
GitHub Integration Layer

This module provides GitHub API integration for PR data retrieval
and comment/review posting.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .parser import PRDiffParser

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PRDiffParser']
