"""Configuration error screen served when the service credential is missing."""

from __future__ import annotations

import logging

from aiogram import Router
from aiogram.types import CallbackQuery, Message

from stylist.bot_service.formatting import CONFIGURATION_ERROR_TEXT
from stylist.config.settings import ConfigurationError

logger = logging.getLogger(__name__)


def setup(router: Router, error: ConfigurationError) -> None:
    """Answer every update with the configuration error screen."""

    @router.message()
    async def handle_any_message(message: Message) -> None:
        logger.warning("Refusing update: %s is not configured.", error.variable)
        await message.answer(CONFIGURATION_ERROR_TEXT)

    @router.callback_query()
    async def handle_any_callback(callback: CallbackQuery) -> None:
        await callback.answer("Configuration Error: the API key is missing.", show_alert=True)
