"""Prompt construction for the outfit suggestion request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from stylist.storage.catalog import ClothingItem

SYSTEM_INSTRUCTION = (
    "You are a world-class fashion stylist. Your goal is to help users create stylish outfits "
    "from their wardrobe.\n"
    "Analyze the provided images of clothing items.\n"
    "1. Create a cohesive and stylish outfit combination using ONLY the provided items.\n"
    "2. Provide a detailed explanation for your choice, highlighting why the items work well "
    "together (e.g., color theory, style contrast, silhouette balance).\n"
    "3. Suggest 2-3 specific accessories (like a watch, necklace, bag, or hat) that would "
    "complement the outfit. Do not include images of accessories.\n"
    "4. Keep your response concise, friendly, and encouraging. Use markdown for formatting "
    "(e.g., headings, bold text, lists)."
)

USER_PROMPT = (
    "Please create a stylish outfit from the clothing items I've provided. "
    "Explain your choices and suggest some accessories."
)


@dataclass(slots=True)
class SuggestionPrompt:
    """Chat messages for one suggestion request."""

    system: str
    image_urls: list[str] = field(default_factory=list)
    text: str = USER_PROMPT

    def messages(self) -> list[dict[str, Any]]:
        """Return OpenAI-style chat messages: images first, then the text prompt."""

        content: list[dict[str, Any]] = [
            {"type": "image_url", "image_url": {"url": url}} for url in self.image_urls
        ]
        content.append({"type": "text", "text": self.text})
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": content},
        ]


class PromptBuilder:
    """Builds the stylist request from the selected clothing items."""

    def __init__(self, system_instruction: str = SYSTEM_INSTRUCTION, user_prompt: str = USER_PROMPT) -> None:
        self._system_instruction = system_instruction
        self._user_prompt = user_prompt

    def build(self, items: Sequence[ClothingItem]) -> SuggestionPrompt:
        image_urls = [item.image_data_url for item in items]
        return SuggestionPrompt(system=self._system_instruction, image_urls=image_urls, text=self._user_prompt)
