"""Wardrobe browsing and selection handlers."""

from __future__ import annotations

from contextlib import suppress
from typing import Sequence

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import BufferedInputFile, CallbackQuery, InputMediaPhoto, Message

from stylist.bot_service.context import BotContext
from stylist.bot_service.formatting import (
    EMPTY_SELECTION_HINT,
    TOGGLE_PREFIX,
    item_label,
    render_wardrobe,
    wardrobe_keyboard,
)
from stylist.storage.catalog import ClothingItem

ALBUM_LIMIT = 10


def setup(router: Router, context: BotContext) -> None:
    """Register wardrobe and selection handlers."""

    @router.message(Command("wardrobe"))
    async def handle_wardrobe(message: Message) -> None:
        for _, items in context.catalog.grouped():
            if items:
                await send_album(message, context, items)
        await message.answer(
            render_wardrobe(context.catalog),
            reply_markup=wardrobe_keyboard(context.catalog, loading=context.logic.is_loading),
        )

    @router.message(Command("selection"))
    async def handle_selection(message: Message) -> None:
        items = context.catalog.selected_items()
        if not items:
            await message.answer(EMPTY_SELECTION_HINT + " Open /wardrobe to choose.")
            return
        await send_album(message, context, items)

    @router.callback_query(F.data.startswith(TOGGLE_PREFIX))
    async def handle_toggle(callback: CallbackQuery) -> None:
        item_id = (callback.data or "")[len(TOGGLE_PREFIX):]
        item = context.catalog.get(item_id)
        if item is None:
            await callback.answer("That item is not in your wardrobe.")
            return
        selected = context.catalog.toggle(item_id)
        label = item_label(context.catalog, item)
        await callback.answer(f"{label} {'selected' if selected else 'unselected'}")
        await refresh_wardrobe_message(callback, context)


async def refresh_wardrobe_message(callback: CallbackQuery, context: BotContext) -> None:
    """Re-render the wardrobe message the callback came from."""

    if not isinstance(callback.message, Message):
        return
    # Telegram rejects edits that change nothing
    with suppress(TelegramBadRequest):
        await callback.message.edit_text(
            render_wardrobe(context.catalog),
            reply_markup=wardrobe_keyboard(context.catalog, loading=context.logic.is_loading),
        )


def _input_file(item: ClothingItem) -> BufferedInputFile:
    extension = item.mime_type.split("/")[-1]
    return BufferedInputFile(item.image_bytes, filename=f"{item.id}.{extension}")


async def send_album(message: Message, context: BotContext, items: Sequence[ClothingItem]) -> None:
    """Send ``items`` as photo albums captioned with their wardrobe labels."""

    for start in range(0, len(items), ALBUM_LIMIT):
        chunk = items[start:start + ALBUM_LIMIT]
        if len(chunk) == 1:
            item = chunk[0]
            await message.answer_photo(_input_file(item), caption=item_label(context.catalog, item))
            continue
        media = [
            InputMediaPhoto(media=_input_file(item), caption=item_label(context.catalog, item))
            for item in chunk
        ]
        await message.answer_media_group(media=media)
