"""Tests for the suggestion request workflow."""

from __future__ import annotations

import asyncio

import pytest

from stylist.api.stylist_client import FailureKind, ServiceFailure
from stylist.logic import (
    FALLBACK_MESSAGE,
    NO_SELECTION_MESSAGE,
    NoSelection,
    StylistLogic,
    SuggestionPhase,
)
from stylist.prompts import SuggestionPrompt
from stylist.storage import ClothingCategory, WardrobeCatalog


class FakeClient:
    """Records prompts and answers with a canned reply or failure."""

    def __init__(self, reply: str = "X", error: Exception | None = None, gate: asyncio.Event | None = None) -> None:
        self.reply = reply
        self.error = error
        self.gate = gate
        self.prompts: list[SuggestionPrompt] = []

    async def suggest_outfit(self, prompt: SuggestionPrompt) -> str:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


def _catalog_with_selection(png_bytes: bytes, count: int = 2) -> WardrobeCatalog:
    catalog = WardrobeCatalog()
    for _ in range(count):
        item = catalog.add_item(ClothingCategory.TOPS, png_bytes)
        catalog.toggle(item.id)
    return catalog


@pytest.mark.asyncio
async def test_empty_selection_makes_no_call(png_bytes: bytes) -> None:
    catalog = WardrobeCatalog()
    catalog.add_item(ClothingCategory.TOPS, png_bytes)
    client = FakeClient()
    logic = StylistLogic(catalog, client)

    with pytest.raises(NoSelection):
        await logic.request_suggestion()

    assert client.prompts == []
    assert logic.status.phase is SuggestionPhase.ERROR
    assert logic.status.error == NO_SELECTION_MESSAGE


@pytest.mark.asyncio
async def test_success_stores_result(png_bytes: bytes) -> None:
    client = FakeClient(reply="X")
    logic = StylistLogic(_catalog_with_selection(png_bytes), client)

    status = await logic.request_suggestion()

    assert status.result == "X"
    assert status.error is None
    assert not logic.is_loading
    assert len(client.prompts) == 1
    assert len(client.prompts[0].image_urls) == 2


@pytest.mark.asyncio
async def test_service_failure_stores_fallback(png_bytes: bytes) -> None:
    client = FakeClient(error=ServiceFailure("down", FailureKind.NETWORK))
    logic = StylistLogic(_catalog_with_selection(png_bytes), client)

    status = await logic.request_suggestion()

    assert status.phase is SuggestionPhase.ERROR
    assert status.error == FALLBACK_MESSAGE
    assert status.failure_kind is FailureKind.NETWORK
    assert status.result is None
    assert not status.is_loading


@pytest.mark.asyncio
async def test_new_request_clears_previous_error(png_bytes: bytes) -> None:
    client = FakeClient(error=ServiceFailure("bad", FailureKind.MALFORMED))
    logic = StylistLogic(_catalog_with_selection(png_bytes), client)
    await logic.request_suggestion()

    client.error = None
    status = await logic.request_suggestion()

    assert status.phase is SuggestionPhase.RESULT
    assert status.error is None


@pytest.mark.asyncio
async def test_second_request_while_loading_is_ignored(png_bytes: bytes) -> None:
    gate = asyncio.Event()
    client = FakeClient(reply="done", gate=gate)
    logic = StylistLogic(_catalog_with_selection(png_bytes), client)

    first = asyncio.create_task(logic.request_suggestion())
    await asyncio.sleep(0)
    assert logic.is_loading

    busy = await logic.request_suggestion()
    assert busy.phase is SuggestionPhase.LOADING

    gate.set()
    final = await first

    assert final.result == "done"
    assert len(client.prompts) == 1


@pytest.mark.asyncio
async def test_unexpected_error_does_not_leave_loading(png_bytes: bytes) -> None:
    client = FakeClient(error=KeyError("boom"))
    logic = StylistLogic(_catalog_with_selection(png_bytes), client)

    with pytest.raises(KeyError):
        await logic.request_suggestion()

    assert logic.status.phase is SuggestionPhase.ERROR
    assert logic.status.error == FALLBACK_MESSAGE
