"""Entrypoint for the stylist Telegram bot."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from aiogram import Bot, Dispatcher, Router
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from stylist.api import StylistClient
from stylist.bot_service.context import BotContext
from stylist.bot_service.handlers import config_error, setup_handlers
from stylist.bot_service.state_machine import IntakeFlow
from stylist.config.settings import ConfigurationError, StylistSettings, get_settings
from stylist.logic import StylistLogic
from stylist.monitoring.logging import configure_logging
from stylist.storage import WardrobeCatalog

logger = logging.getLogger(__name__)


def build_router(settings: StylistSettings) -> tuple[Router, StylistClient | None]:
    """Wire the session dependencies, or the configuration error screen."""

    router = Router()
    try:
        client = StylistClient(settings)
    except ConfigurationError as exc:
        logger.error("Starting in configuration error mode: %s", exc)
        config_error.setup(router, exc)
        return router, None

    catalog = WardrobeCatalog()
    context = BotContext(
        settings=settings,
        catalog=catalog,
        logic=StylistLogic(catalog, client),
        intake=IntakeFlow(catalog),
    )
    setup_handlers(router, context)
    return router, client


async def main() -> None:
    """Initialise dependencies and start polling Telegram."""

    configure_logging()
    settings = get_settings()
    bot_token = settings.require_bot_token()

    router, client = build_router(settings)
    bot = Bot(token=bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dispatcher = Dispatcher()
    dispatcher.include_router(router)

    try:
        logger.info("Starting stylist bot polling.")
        await dispatcher.start_polling(bot)
    finally:
        with suppress(Exception):
            await bot.session.close()
        if client is not None:
            with suppress(Exception):
                await client.close()


def run() -> None:
    """Console script entrypoint."""

    try:
        asyncio.run(main())
    except ConfigurationError as exc:
        logger.error("Cannot start: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    run()
