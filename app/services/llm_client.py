"""Thin chat completion client for general conversation."""

from __future__ import annotations

import json
from typing import Any

import httpx

from app.config.settings import ChatConfig, settings
from app.services.capability import CapabilityClient, CapabilityError, CapabilityResult

_TEXT_KEYS = ("result", "response", "message")


def _extract_reply(data: Any) -> str | None:
    """Pull the reply text out of the several shapes the backend answers with."""

    if isinstance(data, str):
        return data.strip() or None
    if isinstance(data, dict):
        for key in _TEXT_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        if data:
            return json.dumps(data, ensure_ascii=False)
    return None


class ChatCompletionClient(CapabilityClient):
    """Send a prompt to the chat completion API and return its reply text."""

    capability = "chat"
    unavailable_message = "AI conversation service is currently unavailable"
    disabled_message = "AI conversation service not configured"

    def __init__(
        self,
        config: ChatConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=config.timeout_seconds, transport=transport)
        self._config = config

    @property
    def configured(self) -> bool:
        return self._config.configured

    @property
    def provider_name(self) -> str:
        return self._config.provider_name

    async def complete(self, prompt: str) -> CapabilityResult:
        """Return ``{"reply": ..., "provider": ...}`` or a failure result."""

        if not self.configured:
            return self._disabled()

        api_key = self._config.api_key.get_secret_value() if self._config.api_key else ""
        try:
            response = await self._request(
                "GET",
                self._config.base_url,
                params={"apikey": api_key, "q": prompt},
                headers={"Accept": "application/json"},
            )
            reply = _extract_reply(self._json(response))
            if not reply:
                raise CapabilityError("chat backend returned an empty reply")
        except CapabilityError as exc:
            return self._failed(exc)

        return self._succeeded(reply=reply, provider=self.provider_name)


def get_chat_client() -> ChatCompletionClient:
    """Return the process-wide chat completion client."""

    return _DEFAULT_CLIENT


_DEFAULT_CLIENT = ChatCompletionClient(settings.chat)


__all__ = ["ChatCompletionClient", "get_chat_client"]
