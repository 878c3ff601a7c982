"""
Unit tests for prompt building and Gemini review generation.
"""

import pytest
from unittest.mock import Mock

from pr_review_action.llm.generator import LLMGenerationError, ReviewGenerator
from pr_review_action.llm.prompts import OUTPUT_FORMAT, REVIEW_INSTRUCTIONS, SYSTEM_PROMPT, PromptBuilder


def make_genai_client(text):
    client = Mock()
    client.models.generate_content.return_value = Mock(text=text)
    return client


class TestPromptBuilder:
    """Unit tests for PromptBuilder."""

    def test_prompt_layout(self):
        prompt = PromptBuilder().build_review_prompt("CONTEXT")

        assert prompt == f"{SYSTEM_PROMPT}\n\nCONTEXT\n\n{REVIEW_INSTRUCTIONS}\n\n{OUTPUT_FORMAT}"

    def test_instructions_cover_review_areas(self):
        for area in ("Overall Assessment", "Security", "Performance", "Testing", "Suggestions"):
            assert area in REVIEW_INSTRUCTIONS


class TestReviewGenerator:
    """Unit tests for ReviewGenerator."""

    def test_requires_api_key(self):
        with pytest.raises(ValueError, match="Gemini API key is required"):
            ReviewGenerator("")

    def test_generate_review_returns_text_unmodified(self):
        text = "## Review\n### src/app.py\nLooks fine.\n"
        client = make_genai_client(text)

        generator = ReviewGenerator("key", model_name="gemini-test", client=client)
        result = generator.generate_review("CONTEXT")

        assert result == text
        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert "CONTEXT" in kwargs["contents"]
        assert kwargs["contents"].startswith(SYSTEM_PROMPT)

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_empty_response_raises(self, text):
        generator = ReviewGenerator("key", client=make_genai_client(text))

        with pytest.raises(LLMGenerationError):
            generator.generate_review("CONTEXT")

    def test_backend_errors_propagate(self):
        client = Mock()
        client.models.generate_content.side_effect = RuntimeError("quota exhausted")

        generator = ReviewGenerator("key", client=client)

        with pytest.raises(RuntimeError, match="quota exhausted"):
            generator.generate_review("CONTEXT")
