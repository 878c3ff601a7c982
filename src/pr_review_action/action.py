"""
GitHub Action Entry Point

Reads the PR coordinates from the Actions environment, runs the analysis
through the MCP analyzer server and posts the result back to the PR.

Exit codes:
    0  analysis completed (posting failures are only logged)
    1  setup or protocol error
"""

import os
import sys
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import CallToolResult, TextContent
from pydantic import ValidationError

from .config import ActionConfig, setup_logging
from .formatting.github import GitHubCommentFormatter
from .github.client import GitHubClient
from .models.pr_diff import PRReference
from .models.review import AnalysisResult
from .server import TOOL_NAME


logger = logging.getLogger(__name__)


class AnalyzerProtocolError(Exception):
    """The analyzer reply did not carry the expected structured result."""


def load_config(environ: Optional[Mapping[str, str]] = None) -> ActionConfig:
    """Load action config from the environment, layered over ACTION_CONFIG_FILE if set."""
    env = os.environ if environ is None else environ
    config_path = env.get("ACTION_CONFIG_FILE")
    if config_path:
        return ActionConfig.from_yaml(config_path, env)
    return ActionConfig.from_env(env)


@asynccontextmanager
async def open_analyzer_session(config: ActionConfig) -> AsyncIterator[ClientSession]:
    """Spawn the analyzer server and yield an initialized MCP session."""
    command, *args = config.server.command
    params = StdioServerParameters(
        command=command,
        args=args,
        env=config.server_environment(),
    )

    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            logger.info("Connected to MCP server")
            yield session


def build_tool_arguments(config: ActionConfig, pr_ref: PRReference) -> Dict[str, Any]:
    """analyze_pr tool arguments (geminiApiKey only when configured)."""
    arguments = {
        "owner": pr_ref.owner,
        "repo": pr_ref.repo,
        "prNumber": pr_ref.number,
        "githubToken": config.github.token,
    }
    if config.gemini.api_key:
        arguments["geminiApiKey"] = config.gemini.api_key
    return arguments


def _error_text(result: CallToolResult) -> str:
    texts = [block.text for block in result.content if isinstance(block, TextContent)]
    return " ".join(texts) or "unknown error"


async def request_analysis(session: ClientSession, arguments: Dict[str, Any]) -> AnalysisResult:
    """
    Issue the single analyze_pr call.

    Raises:
        AnalyzerProtocolError: On tool errors or missing/invalid structured content
    """
    result = await session.call_tool(TOOL_NAME, arguments=arguments)

    if result.isError:
        raise AnalyzerProtocolError(f"analyze_pr failed: {_error_text(result)}")

    if result.structuredContent is None:
        raise AnalyzerProtocolError("MCP server did not return structured content")

    try:
        return AnalysisResult.model_validate(result.structuredContent)
    except ValidationError as e:
        raise AnalyzerProtocolError(f"MCP server returned invalid structured content: {e}") from e


def post_results(
    github_client: GitHubClient,
    pr_ref: PRReference,
    result: AnalysisResult,
    formatter: Optional[GitHubCommentFormatter] = None
) -> Dict[str, bool]:
    """
    Post the summary comment and, if there are comments, one aggregated review.

    Posting failures are logged and reported in the returned status map.
    """
    formatter = formatter or GitHubCommentFormatter()
    status = {"summary": False, "review": False}

    try:
        github_client.create_issue_comment(
            pr_ref.owner, pr_ref.repo, pr_ref.number, formatter.format_summary(result)
        )
        status["summary"] = True
    except Exception as e:
        logger.error(f"Failed to post summary comment: {e}")

    if result.has_comments:
        try:
            github_client.create_review(
                pr_ref.owner,
                pr_ref.repo,
                pr_ref.number,
                formatter.format_review_body(result.comments),
                event="COMMENT"
            )
            status["review"] = True
        except Exception as e:
            logger.error(f"Failed to post review: {e}")

    return status


async def run_action(config: ActionConfig) -> AnalysisResult:
    """Validate config, run the analysis through the analyzer, post the result."""
    config.validate()
    pr_ref = config.pr_reference()
    logger.debug(f"Action config: {config.to_dict()}")

    github_client = GitHubClient(
        config.github.token,
        base_url=config.github.api_base_url,
        timeout=config.github.timeout_seconds
    )

    async with open_analyzer_session(config) as session:
        result = await request_analysis(session, build_tool_arguments(config, pr_ref))

    logger.info(f"Received analysis for {pr_ref}: {len(result.comments)} comments")
    post_results(github_client, pr_ref, result)

    logger.info("PR analysis completed.")
    return result


def main(environ: Optional[Mapping[str, str]] = None) -> int:
    """Run the action and return the process exit code."""
    try:
        config = load_config(environ)
        config.validate()
        setup_logging(config.logging)
        asyncio.run(run_action(config))
    except Exception as e:
        logger.error(f"Error running action: {e}")
        return 1
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
