"""
Review Generator

Generates PR reviews with the Gemini API from a PR context blob.
"""

import logging
from typing import Optional

from google import genai

from ..config import DEFAULT_GEMINI_MODEL
from .prompts import PromptBuilder


logger = logging.getLogger(__name__)


class LLMGenerationError(Exception):
    """The review backend returned no usable text."""


class ReviewGenerator:
    """
    Generates code reviews using Gemini.

    One prompt, one call; the response text is returned unmodified.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_GEMINI_MODEL,
        client: Optional[genai.Client] = None,
        prompt_builder: Optional[PromptBuilder] = None
    ):
        """
        Initialize review generator.

        Args:
            api_key: Gemini API key
            model_name: Gemini model to call
            client: Pre-built genai client (tests inject a fake)
            prompt_builder: Prompt builder wrapping the context
        """
        if not api_key and client is None:
            raise ValueError(
                "Gemini API key is required. Set GEMINI_API_KEY environment variable "
                "or pass geminiApiKey parameter."
            )

        self.model_name = model_name
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.client = client or genai.Client(api_key=api_key)

    def generate_review(self, pr_context: str) -> str:
        """
        Generate a review for a PR context.

        Args:
            pr_context: Context produced by ContextBuilder

        Returns:
            Full markdown review text

        Raises:
            LLMGenerationError: If the response carries no text
        """
        prompt = self.prompt_builder.build_review_prompt(pr_context)

        logger.info(f"Calling Gemini API ({self.model_name}), prompt length: {len(prompt)}")
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=prompt,
        )

        text = response.text or ""
        if not text.strip():
            raise LLMGenerationError("Gemini returned an empty response")

        logger.info(f"Gemini analysis received, length: {len(text)}")
        return text
