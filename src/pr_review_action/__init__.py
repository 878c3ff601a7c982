"""
PR Review Action

GitHub Pull Request 분석 액션: MCP 분석 서버(analyze_pr)와
GitHub 코멘트 게시 invoker
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
