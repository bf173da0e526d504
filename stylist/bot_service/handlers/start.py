"""Start, help and fallback handlers."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from stylist.bot_service.context import BotContext

HELP_TEXT = (
    "👗 <b>Virtual Stylist AI</b>\n\n"
    "/add – add a clothing item (or just send a photo)\n"
    "/wardrobe – browse your wardrobe and select items\n"
    "/selection – show the selected items\n"
    "/suggest – get a style suggestion for the selection\n"
    "/cancel – stop adding an item"
)


def setup(router: Router, context: BotContext) -> None:
    """Register /start and /help handlers."""

    @router.message(CommandStart())
    async def handle_start(message: Message) -> None:
        await message.answer(
            "Hi! I'm your personal stylist. Send me photos of your clothes, "
            "pick a few and I'll put an outfit together.\n\n" + HELP_TEXT,
        )

    @router.message(Command("help"))
    async def handle_help(message: Message) -> None:
        await message.answer(HELP_TEXT)


def setup_fallback(router: Router, context: BotContext) -> None:
    """Register the catch-all handler; must run after every other setup."""

    @router.message()
    async def handle_unknown(message: Message) -> None:
        await message.answer("I didn't get that.\n\n" + HELP_TEXT)
