"""Async wrapper around the OpenAI-compatible styling endpoint."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

import httpx
import openai
from openai import AsyncOpenAI

from stylist.config.settings import StylistError, StylistSettings
from stylist.prompts.prompt_builder import SuggestionPrompt

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """Coarse cause of a failed suggestion request."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    SERVICE = "service"
    MALFORMED = "malformed"


class ServiceFailure(StylistError):
    """Raised when the styling service cannot produce a suggestion."""

    def __init__(self, message: str, kind: FailureKind, status_code: int | None = None) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


class StylistClient:
    """Sends wardrobe photos to the multimodal model and returns its markdown reply."""

    def __init__(self, settings: StylistSettings) -> None:
        api_key = settings.require_api_key()
        base_url = settings.base_url.rstrip("/")
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.request_timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
            },
        )
        openai_kwargs: dict[str, Any] = {}
        if settings.request_timeout is not None:
            openai_kwargs["timeout"] = settings.request_timeout
        self._openai = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            **openai_kwargs,
        )

    async def close(self) -> None:
        """Close the underlying HTTP clients."""

        await self._client.aclose()
        await self._openai.close()

    async def suggest_outfit(self, prompt: SuggestionPrompt) -> str:
        """Request an outfit suggestion for the images in ``prompt``."""

        try:
            response = await self._openai.chat.completions.create(
                model=self._settings.model,
                messages=prompt.messages(),
                temperature=self._settings.temperature,
                top_p=self._settings.top_p,
            )
        except openai.APITimeoutError as exc:
            raise ServiceFailure("Styling service timed out.", FailureKind.TIMEOUT) from exc
        except openai.APIConnectionError as exc:
            raise ServiceFailure("Styling service is unreachable.", FailureKind.NETWORK) from exc
        except openai.RateLimitError as exc:
            raise ServiceFailure(
                "Styling service rate limit reached.",
                FailureKind.RATE_LIMITED,
                status_code=exc.status_code,
            ) from exc
        except openai.APIStatusError as exc:
            raise ServiceFailure(
                f"Styling service returned error {exc.status_code}.",
                FailureKind.SERVICE,
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise ServiceFailure("Styling service response could not be read.", FailureKind.MALFORMED) from exc

        return self._first_choice_content(response)

    @staticmethod
    def _first_choice_content(response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            raise ServiceFailure("Model returned no choices.", FailureKind.MALFORMED)
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise ServiceFailure("Model returned an empty suggestion.", FailureKind.MALFORMED)
        return content

    async def _request_json(self, method: str, endpoint: str) -> dict[str, Any]:
        try:
            response = await self._client.request(method, endpoint)
            response.raise_for_status()
            if not response.content:
                return {}
            return response.json()
        except httpx.TimeoutException as exc:
            raise ServiceFailure("Styling service timed out.", FailureKind.TIMEOUT) from exc
        except httpx.HTTPStatusError as exc:
            raise ServiceFailure(
                f"Styling service returned error {exc.response.status_code}: {exc.response.text}",
                FailureKind.SERVICE,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.TransportError as exc:
            raise ServiceFailure("Styling service is unreachable.", FailureKind.NETWORK) from exc
        except ValueError as exc:
            raise ServiceFailure("Styling service sent invalid JSON.", FailureKind.MALFORMED) from exc

    async def ping(self) -> bool:
        """Return ``True`` if the service lists at least one model."""

        payload: Mapping[str, Any] = await self._request_json("GET", self._settings.health_path)
        return bool(payload.get("data"))
