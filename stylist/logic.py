"""Suggestion request workflow and its status record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from stylist.api.stylist_client import FailureKind, ServiceFailure
from stylist.config.settings import StylistError
from stylist.metrics.prometheus_exporter import suggestion_requests_total
from stylist.prompts.prompt_builder import PromptBuilder, SuggestionPrompt
from stylist.storage.catalog import WardrobeCatalog

logger = logging.getLogger(__name__)

NO_SELECTION_MESSAGE = "Please select at least one item to get a style suggestion."
FALLBACK_MESSAGE = (
    "I'm sorry, I had trouble creating an outfit. The selected items might not be clear enough. "
    "Please try again with different items."
)


class NoSelection(StylistError):
    """Raised when a suggestion is requested with nothing selected."""


class SuggestionService(Protocol):
    async def suggest_outfit(self, prompt: SuggestionPrompt) -> str: ...


class SuggestionPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


@dataclass(slots=True, frozen=True)
class SuggestionStatus:
    """Exactly one of idle, loading, result or error."""

    phase: SuggestionPhase = SuggestionPhase.IDLE
    result: str | None = None
    error: str | None = None
    failure_kind: FailureKind | None = None

    @classmethod
    def idle(cls) -> "SuggestionStatus":
        return cls()

    @classmethod
    def loading(cls) -> "SuggestionStatus":
        return cls(phase=SuggestionPhase.LOADING)

    @classmethod
    def succeeded(cls, text: str) -> "SuggestionStatus":
        return cls(phase=SuggestionPhase.RESULT, result=text)

    @classmethod
    def failed(cls, message: str, kind: FailureKind | None = None) -> "SuggestionStatus":
        return cls(phase=SuggestionPhase.ERROR, error=message, failure_kind=kind)

    @property
    def is_loading(self) -> bool:
        return self.phase is SuggestionPhase.LOADING


class StylistLogic:
    """Runs suggestion requests for the current selection, one at a time."""

    def __init__(
        self,
        catalog: WardrobeCatalog,
        client: SuggestionService,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self._catalog = catalog
        self._client = client
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._status = SuggestionStatus.idle()

    @property
    def catalog(self) -> WardrobeCatalog:
        return self._catalog

    @property
    def status(self) -> SuggestionStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._status.is_loading

    async def request_suggestion(self) -> SuggestionStatus:
        """Ask the styling service about the selected items.

        Does nothing while a request is already in flight. Raises
        ``NoSelection`` without contacting the service when the selection is
        empty. Service failures never propagate: they end in the error phase
        with a fixed fallback message.
        """

        if self._status.is_loading:
            suggestion_requests_total.labels(outcome="busy").inc()
            logger.info("Suggestion already in progress; ignoring request.")
            return self._status

        items = self._catalog.selected_items()
        if not items:
            suggestion_requests_total.labels(outcome="no_selection").inc()
            self._status = SuggestionStatus.failed(NO_SELECTION_MESSAGE)
            raise NoSelection(NO_SELECTION_MESSAGE)

        prompt = self._prompt_builder.build(items)
        self._status = SuggestionStatus.loading()
        logger.info("Requesting outfit suggestion for %d item(s).", len(items))
        try:
            text = await self._client.suggest_outfit(prompt)
        except ServiceFailure as exc:
            logger.error("Outfit suggestion failed (%s): %s", exc.kind.value, exc)
            suggestion_requests_total.labels(outcome="error").inc()
            self._status = SuggestionStatus.failed(FALLBACK_MESSAGE, exc.kind)
        else:
            suggestion_requests_total.labels(outcome="result").inc()
            self._status = SuggestionStatus.succeeded(text)
        finally:
            if self._status.is_loading:
                self._status = SuggestionStatus.failed(FALLBACK_MESSAGE, FailureKind.SERVICE)
        return self._status
