"""Register message and callback handlers."""

from __future__ import annotations

from aiogram import Router

from stylist.bot_service.context import BotContext
from stylist.bot_service.filters import OwnerFilter

from . import start, suggest, upload, wardrobe


def setup_handlers(router: Router, context: BotContext) -> None:
    """Attach all handler groups to the provided router."""

    owner_filter = OwnerFilter(context.settings.owner_chat_id)
    router.message.filter(owner_filter)
    router.callback_query.filter(owner_filter)

    start.setup(router, context)
    upload.setup(router, context)
    wardrobe.setup(router, context)
    suggest.setup(router, context)
    start.setup_fallback(router, context)
