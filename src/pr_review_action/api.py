"""
PR Analyzer API

Main interface that orchestrates one analysis run, from PR data
collection to the structured result returned by the analyze_pr tool.
"""

import logging
import asyncio
from typing import List, Optional, Tuple
from datetime import datetime
from dataclasses import dataclass

from .config import AnalyzerSettings
from .github.client import GitHubClient
from .github.parser import PRDiffParser
from .llm.generator import ReviewGenerator
from .models.pr_diff import FileChange, PRReference, PullRequestInfo
from .models.review import AnalysisResult
from .review.context import ContextBuilder
from .review.extraction import extract_file_comments
from .review.heuristics import HeuristicAnalyzer


logger = logging.getLogger(__name__)


@dataclass
class AnalysisRequest:
    """Request for PR analysis (analyze_pr tool arguments)."""
    owner: str
    repo: str
    pr_number: int
    github_token: str
    gemini_api_key: Optional[str] = None


class PRAnalyzer:
    """
    Main PR analysis interface.

    Orchestrates one analysis:
    1. Fetch PR metadata and changed files (jointly awaited)
    2. Build the bounded PR context
    3. Generate a Gemini review, or apply heuristic rules when no
       generator is configured
    """

    def __init__(
        self,
        github_client: GitHubClient,
        generator: Optional[ReviewGenerator] = None,
        parser: Optional[PRDiffParser] = None,
        context_builder: Optional[ContextBuilder] = None,
        heuristic_analyzer: Optional[HeuristicAnalyzer] = None
    ):
        """
        Initialize PR analyzer.

        Args:
            github_client: Authenticated GitHub client
            generator: Gemini review generator; None selects the heuristic variant
            parser: GitHub response parser
            context_builder: PR context builder
            heuristic_analyzer: Rule-based analyzer
        """
        self.github_client = github_client
        self.generator = generator
        self.parser = parser or PRDiffParser()
        self.context_builder = context_builder or ContextBuilder()
        self.heuristic_analyzer = heuristic_analyzer or HeuristicAnalyzer()

    @property
    def variant(self) -> str:
        return "ai" if self.generator is not None else "heuristic"

    async def fetch_pull_request(self, pr_ref: PRReference) -> Tuple[PullRequestInfo, List[FileChange]]:
        """Fetch PR metadata and file list; both reads must succeed."""
        pr_data, files_data = await asyncio.gather(
            asyncio.to_thread(self.github_client.get_pull_request, pr_ref.owner, pr_ref.repo, pr_ref.number),
            asyncio.to_thread(self.github_client.get_pull_request_files, pr_ref.owner, pr_ref.repo, pr_ref.number),
        )
        return self.parser.parse_pull_request(pr_data), self.parser.parse_files(files_data)

    async def analyze(self, pr_ref: PRReference) -> AnalysisResult:
        """
        Analyze a pull request.

        Args:
            pr_ref: Pull request coordinates

        Returns:
            AnalysisResult with summary and per-file comments

        Raises:
            GitHubAPIError, LLMGenerationError: propagated to the caller
        """
        pr_info, files = await self.fetch_pull_request(pr_ref)
        context = self.context_builder.build_context(pr_info, files)

        if self.generator is None:
            return self.heuristic_analyzer.analyze(pr_ref, files)

        review_text = await asyncio.to_thread(self.generator.generate_review, context)
        comments = extract_file_comments(review_text)
        return AnalysisResult(summary=review_text, comments=comments)


def create_analyzer(request: AnalysisRequest, settings: AnalyzerSettings) -> PRAnalyzer:
    """Build a PRAnalyzer for a request according to the analysis mode."""
    github_client = GitHubClient(
        request.github_token,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout
    )

    api_key = settings.resolve_gemini_key(request.gemini_api_key)
    generator = ReviewGenerator(api_key, model_name=settings.gemini.model) if api_key else None

    return PRAnalyzer(github_client, generator=generator)


async def analyze_pull_request(
    request: AnalysisRequest,
    settings: Optional[AnalyzerSettings] = None
) -> AnalysisResult:
    """
    Run one analysis and always return a well-formed result.

    Any failure (invalid coordinates, GitHub read errors, generation
    errors) becomes a degraded result whose summary describes the error.
    """
    start_time = datetime.now()
    settings = settings or AnalyzerSettings.from_env()

    try:
        pr_ref = PRReference(request.owner, request.repo, request.pr_number)
        analyzer = create_analyzer(request, settings)
        logger.info(f"Starting {analyzer.variant} analysis of {pr_ref}")
        result = await analyzer.analyze(pr_ref)
    except Exception as e:
        logger.error(f"Error in analyze_pr tool: {e}")
        return AnalysisResult.from_error(str(e) or e.__class__.__name__)

    processing_time = (datetime.now() - start_time).total_seconds()
    logger.info(
        f"Analysis completed for {pr_ref} ({processing_time:.2f}s): "
        f"summary length {len(result.summary)}, {len(result.comments)} comments"
    )
    return result
