"""Handlers that request and display outfit suggestions."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from aiogram import F, Router
from aiogram.enums import ChatAction
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from stylist.bot_service.context import BotContext
from stylist.bot_service.formatting import (
    LOADING_TEXT,
    SUGGEST_CALLBACK,
    html_to_text,
    markdown_to_telegram_html,
    split_message,
)
from stylist.bot_service.handlers.wardrobe import refresh_wardrobe_message
from stylist.logic import FALLBACK_MESSAGE, NoSelection, SuggestionPhase

logger = logging.getLogger(__name__)

BUSY_TEXT = "Thinking... your stylist is still working on the last request."


def setup(router: Router, context: BotContext) -> None:
    """Register suggestion handlers."""

    @router.message(Command("suggest"))
    async def handle_suggest(message: Message) -> None:
        if context.logic.is_loading:
            await message.answer(BUSY_TEXT)
            return
        await run_suggestion(message, context)

    @router.callback_query(F.data == SUGGEST_CALLBACK)
    async def handle_suggest_button(callback: CallbackQuery) -> None:
        if context.logic.is_loading:
            await callback.answer("Thinking...")
            return
        await callback.answer()
        if not isinstance(callback.message, Message):
            return
        await run_suggestion(callback.message, context, callback=callback)


async def run_suggestion(message: Message, context: BotContext, callback: CallbackQuery | None = None) -> None:
    """Drive one suggestion request and post its outcome in ``message``'s chat."""

    if not context.catalog.selected_ids:
        try:
            await context.logic.request_suggestion()
        except NoSelection as exc:
            await message.answer(str(exc))
        return

    progress = await message.answer(LOADING_TEXT)
    task = asyncio.create_task(context.logic.request_suggestion())
    # let the request enter the loading phase before re-rendering the keyboard
    await asyncio.sleep(0)
    with suppress(TelegramBadRequest):
        await message.bot.send_chat_action(message.chat.id, ChatAction.TYPING)
    if callback is not None:
        await refresh_wardrobe_message(callback, context)

    try:
        status = await task
    except NoSelection as exc:
        await progress.edit_text(str(exc))
        return
    except Exception:
        logger.exception("Suggestion request failed unexpectedly")
        status = context.logic.status
    finally:
        if callback is not None:
            await refresh_wardrobe_message(callback, context)

    if status.phase is SuggestionPhase.LOADING:
        await progress.edit_text(BUSY_TEXT)
        return
    with suppress(TelegramBadRequest):
        await progress.delete()

    if status.phase is SuggestionPhase.RESULT and status.result:
        for chunk in split_message(markdown_to_telegram_html(status.result)):
            await _send_chunk(message, chunk)
        return
    await message.answer(status.error or FALLBACK_MESSAGE)


async def _send_chunk(message: Message, chunk: str) -> None:
    try:
        await message.answer(chunk)
    except TelegramBadRequest as exc:
        logger.warning("Telegram rejected formatted reply, resending as plain text: %s", exc)
        await message.answer(html_to_text(chunk), parse_mode=None)
