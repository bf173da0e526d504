"""Shared dependencies passed into handler setup functions."""

from __future__ import annotations

from dataclasses import dataclass

from stylist.bot_service.state_machine import IntakeFlow
from stylist.config.settings import StylistSettings
from stylist.logic import StylistLogic
from stylist.storage.catalog import WardrobeCatalog


@dataclass(slots=True)
class BotContext:
    """Container for the single session shared across handlers."""

    settings: StylistSettings
    catalog: WardrobeCatalog
    logic: StylistLogic
    intake: IntakeFlow
