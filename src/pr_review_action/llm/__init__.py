"""
LLM Review Engine

This module provides Gemini-based review generation around
a fixed instructional prompt.
"""

from .prompts import PromptBuilder
from .generator import ReviewGenerator, LLMGenerationError

__all__ = ['PromptBuilder', 'ReviewGenerator', 'LLMGenerationError']
