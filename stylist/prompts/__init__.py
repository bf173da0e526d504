"""Prompt building utilities."""

from .prompt_builder import SYSTEM_INSTRUCTION, USER_PROMPT, PromptBuilder, SuggestionPrompt

__all__ = ["SYSTEM_INSTRUCTION", "USER_PROMPT", "PromptBuilder", "SuggestionPrompt"]
