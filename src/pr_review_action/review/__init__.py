"""
Review Analysis

This module provides PR context building, heuristic rules,
and per-file comment extraction from generated reviews.
"""

from .context import ContextBuilder, truncate_patch
from .heuristics import HeuristicAnalyzer
from .extraction import extract_file_comments

__all__ = ['ContextBuilder', 'truncate_patch', 'HeuristicAnalyzer', 'extract_file_comments']
