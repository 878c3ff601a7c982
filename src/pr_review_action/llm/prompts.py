"""
Prompt Builder

Builds the fixed instructional prompt that wraps the PR context
for the generative review backend.
"""

import logging


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are an expert code reviewer. Analyze the following Pull Request "
    "and provide a comprehensive review."
)

REVIEW_INSTRUCTIONS = """Please provide:
1. **Overall Assessment**: A summary of what this PR does and its impact
2. **Code Quality**: Review code style, best practices, potential bugs, and improvements
3. **Security**: Identify any security concerns or vulnerabilities
4. **Performance**: Note any performance implications
5. **Testing**: Assess test coverage and suggest improvements
6. **Documentation**: Check if changes are properly documented
7. **Specific Issues**: List specific issues found in the code with file paths and line numbers if possible
8. **Suggestions**: Provide actionable suggestions for improvement"""

OUTPUT_FORMAT = (
    "Format your response as a comprehensive markdown document that will be posted "
    "as a PR comment. Be thorough, constructive, and professional."
)


class PromptBuilder:
    """Builds review prompts around a PR context blob."""

    def __init__(
        self,
        system_prompt: str = SYSTEM_PROMPT,
        instructions: str = REVIEW_INSTRUCTIONS,
        output_format: str = OUTPUT_FORMAT
    ):
        self.system_prompt = system_prompt
        self.instructions = instructions
        self.output_format = output_format

    def build_review_prompt(self, pr_context: str) -> str:
        """
        Build complete review prompt.

        Args:
            pr_context: Context produced by ContextBuilder

        Returns:
            Complete prompt string
        """
        prompt = f"{self.system_prompt}\n\n{pr_context}\n\n{self.instructions}\n\n{self.output_format}"
        logger.debug(f"Built review prompt ({len(prompt)} chars)")
        return prompt
