"""
Data Models

PR Review Action의 핵심 데이터 모델들
"""

from .pr_diff import PRReference, FileChange, PullRequestInfo
from .review import ReviewComment, AnalysisResult

__all__ = [
    "PRReference",
    "FileChange",
    "PullRequestInfo",
    "ReviewComment",
    "AnalysisResult",
]
