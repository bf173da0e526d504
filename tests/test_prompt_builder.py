"""Tests for the suggestion prompt builder."""

from stylist.prompts import SYSTEM_INSTRUCTION, USER_PROMPT, PromptBuilder
from stylist.storage import ClothingCategory, WardrobeCatalog


def test_prompt_has_one_image_per_item_and_text_last(png_bytes: bytes, make_image) -> None:
    catalog = WardrobeCatalog()
    top = catalog.add_item(ClothingCategory.TOPS, png_bytes)
    shoes = catalog.add_item(ClothingCategory.SHOES, make_image("JPEG"))

    messages = PromptBuilder().build([top, shoes]).messages()

    assert messages[0] == {"role": "system", "content": SYSTEM_INSTRUCTION}
    parts = messages[1]["content"]
    assert messages[1]["role"] == "user"
    assert [part["type"] for part in parts] == ["image_url", "image_url", "text"]
    assert parts[0]["image_url"]["url"] == top.image_data_url
    assert parts[1]["image_url"]["url"].startswith("data:image/jpeg;base64,")
    assert parts[2]["text"] == USER_PROMPT


def test_system_instruction_describes_stylist_task() -> None:
    assert "fashion stylist" in SYSTEM_INSTRUCTION
    assert "ONLY the provided items" in SYSTEM_INSTRUCTION
    assert "accessories" in USER_PROMPT
