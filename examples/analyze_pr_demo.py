#!/usr/bin/env python3
"""
PR Analysis Demo

Runs the analyzer pipeline in-process (no MCP server, nothing posted)
and prints the summary and per-file comments.

Usage:
    python examples/analyze_pr_demo.py <owner> <repo> <pr_number>

Example:
    GITHUB_TOKEN=... ANALYSIS_MODE=heuristic python examples/analyze_pr_demo.py psf requests 6710
"""

import sys
import os
import asyncio
import logging

from pr_review_action.api import AnalysisRequest, analyze_pull_request
from pr_review_action.config import AnalyzerSettings, setup_logging
from pr_review_action.formatting.github import GitHubCommentFormatter


def main():
    """Main demo function."""
    settings = AnalyzerSettings.from_env()
    setup_logging(settings.logging)
    logger = logging.getLogger(__name__)

    if len(sys.argv) != 4:
        print("Usage: python analyze_pr_demo.py <owner> <repo> <pr_number>")
        sys.exit(1)

    owner, repo = sys.argv[1], sys.argv[2]
    try:
        pr_number = int(sys.argv[3])
    except ValueError:
        print("Error: PR number must be an integer")
        sys.exit(1)

    token = os.getenv('GITHUB_TOKEN') or os.getenv('GH_TOKEN')
    if not token:
        print("Error: GitHub token not found. Set GITHUB_TOKEN environment variable.")
        sys.exit(1)

    request = AnalysisRequest(owner=owner, repo=repo, pr_number=pr_number, github_token=token)
    logger.info(f"Analyzing {owner}/{repo}#{pr_number} (mode: {settings.analysis.mode})")
    result = asyncio.run(analyze_pull_request(request, settings))

    print("\nSummary:")
    print(result.summary)

    print(f"\nComments: {len(result.comments)}")
    if result.comments:
        print(GitHubCommentFormatter().format_review_body(result.comments))


if __name__ == '__main__':
    main()
