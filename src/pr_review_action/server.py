"""
PR Analyzer MCP Server

Exposes the analyze_pr tool over MCP stdio. The invoker launches this
module as a subprocess and issues a single tool call; stdout carries the
protocol, so all logging goes to stderr.

Run directly:
    python -m pr_review_action.server
"""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .api import AnalysisRequest, analyze_pull_request
from .config import AnalyzerSettings, setup_logging
from .models.review import AnalysisResult


logger = logging.getLogger(__name__)

SERVER_NAME = "pr-reviewer-server"
TOOL_NAME = "analyze_pr"


def create_server(settings: Optional[AnalyzerSettings] = None) -> FastMCP:
    """Create the MCP server with the analyze_pr tool registered."""
    settings = settings or AnalyzerSettings.from_env()
    server = FastMCP(SERVER_NAME)

    @server.tool(
        name=TOOL_NAME,
        title="Analyze GitHub PR",
        description=(
            "Analyze a GitHub Pull Request using AI (Gemini) or heuristic rules "
            "and return a summary with per-file review comments."
        ),
        structured_output=True,
    )
    async def analyze_pr(
        owner: str,
        repo: str,
        prNumber: int,  # noqa: N803 - wire field names are camelCase
        githubToken: str,  # noqa: N803
        geminiApiKey: Optional[str] = None,  # noqa: N803
    ) -> AnalysisResult:
        request = AnalysisRequest(
            owner=owner,
            repo=repo,
            pr_number=prNumber,
            github_token=githubToken,
            gemini_api_key=geminiApiKey,
        )
        return await analyze_pull_request(request, settings)

    return server


def main() -> None:
    """Start the analyzer with stdio transport."""
    settings = AnalyzerSettings.from_env()
    settings.validate()
    setup_logging(settings.logging)

    logger.info(f"Starting {SERVER_NAME} (mode: {settings.analysis.mode})")
    create_server(settings).run()


if __name__ == "__main__":
    main()
