"""Custom aiogram filters used by the stylist bot."""

from __future__ import annotations

from aiogram.filters import BaseFilter
from aiogram.types import CallbackQuery, Message

from stylist.bot_service.context import BotContext
from stylist.bot_service.state_machine import IntakeState


class OwnerFilter(BaseFilter):
    """Passes updates from the configured owner chat, or from any chat when unset."""

    def __init__(self, owner_chat_id: int | None) -> None:
        self._owner_chat_id = owner_chat_id

    async def __call__(self, event: Message | CallbackQuery) -> bool:
        if self._owner_chat_id is None:
            return True
        message = event.message if isinstance(event, CallbackQuery) else event
        if message is None:
            return False
        return message.chat.id == self._owner_chat_id


class IntakeStateFilter(BaseFilter):
    """Matches messages while the add-item flow is at the expected stage."""

    def __init__(self, context: BotContext, expected: IntakeState) -> None:
        self._context = context
        self._expected = expected

    async def __call__(self, message: Message) -> bool:
        return self._context.intake.state is self._expected
