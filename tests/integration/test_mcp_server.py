"""
Integration tests for the analyze_pr MCP tool.

Client and server are connected in memory; the analysis itself is
patched out.
"""

import asyncio
from unittest.mock import AsyncMock, patch

from mcp.shared.memory import create_connected_server_and_client_session

from pr_review_action.config import AnalyzerSettings
from pr_review_action.models.review import AnalysisResult, ReviewComment
from pr_review_action.server import SERVER_NAME, TOOL_NAME, create_server


TOOL_ARGUMENTS = {
    "owner": "acme",
    "repo": "widgets",
    "prNumber": 7,
    "githubToken": "ghs_token",
}


def run_with_client(callback):
    server = create_server(AnalyzerSettings.from_env({"ANALYSIS_MODE": "heuristic"}))

    async def run():
        async with create_connected_server_and_client_session(server._mcp_server) as client:
            return await callback(client)

    return asyncio.run(run())


class TestToolListing:
    """The server advertises exactly one tool with the camelCase contract."""

    def test_server_name(self):
        server = create_server(AnalyzerSettings.from_env({}))
        assert server.name == SERVER_NAME

    def test_analyze_pr_schema(self):
        async def list_tools(client):
            return await client.list_tools()

        tools = run_with_client(list_tools).tools

        assert [tool.name for tool in tools] == [TOOL_NAME]
        schema = tools[0].inputSchema
        assert set(schema["properties"]) == {"owner", "repo", "prNumber", "githubToken", "geminiApiKey"}
        assert set(schema["required"]) == {"owner", "repo", "prNumber", "githubToken"}
        assert schema["properties"]["prNumber"]["type"] == "integer"
        assert "summary" in tools[0].outputSchema["properties"]


class TestToolCall:
    """analyze_pr calls return structured content."""

    @patch('pr_review_action.server.analyze_pull_request', new_callable=AsyncMock)
    def test_structured_result(self, mock_analyze):
        mock_analyze.return_value = AnalysisResult(
            summary="Automated PR analysis found 1 suggestion(s) for acme/widgets#7.",
            comments=[ReviewComment(path="src/config/db.yaml", body="Configuration file modified.")]
        )

        async def call(client):
            return await client.call_tool(TOOL_NAME, dict(TOOL_ARGUMENTS, geminiApiKey="g-key"))

        result = run_with_client(call)

        assert result.isError is False
        assert result.structuredContent == {
            "summary": "Automated PR analysis found 1 suggestion(s) for acme/widgets#7.",
            "comments": [{"path": "src/config/db.yaml", "body": "Configuration file modified.", "position": None}],
        }

        request = mock_analyze.call_args.args[0]
        assert (request.owner, request.repo, request.pr_number) == ("acme", "widgets", 7)
        assert request.github_token == "ghs_token"
        assert request.gemini_api_key == "g-key"

    @patch('pr_review_action.server.analyze_pull_request', new_callable=AsyncMock)
    def test_optional_key_defaults_to_none(self, mock_analyze):
        mock_analyze.return_value = AnalysisResult(summary="ok")

        async def call(client):
            return await client.call_tool(TOOL_NAME, TOOL_ARGUMENTS)

        result = run_with_client(call)

        assert result.structuredContent == {"summary": "ok", "comments": []}
        assert mock_analyze.call_args.args[0].gemini_api_key is None

    @patch('pr_review_action.server.analyze_pull_request', new_callable=AsyncMock)
    def test_degraded_result_is_not_a_tool_error(self, mock_analyze):
        mock_analyze.return_value = AnalysisResult.from_error("GitHub API error: 404 - Not Found")

        async def call(client):
            return await client.call_tool(TOOL_NAME, TOOL_ARGUMENTS)

        result = run_with_client(call)

        assert result.isError is False
        assert result.structuredContent["summary"] == "Error during PR analysis: GitHub API error: 404 - Not Found"
        assert result.structuredContent["comments"] == []

    @patch('pr_review_action.server.analyze_pull_request', new_callable=AsyncMock)
    def test_missing_argument_is_tool_error(self, mock_analyze):
        async def call(client):
            return await client.call_tool(TOOL_NAME, {"owner": "acme", "repo": "widgets"})

        result = run_with_client(call)

        assert result.isError is True
        mock_analyze.assert_not_called()
