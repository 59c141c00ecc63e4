"""
Anthropic messages adapter.

Resends the message list on every call; the system instruction never
enters the list and is passed as the ``system`` parameter instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator

from anthropic import AsyncAnthropic

from ..errors import ProviderCallFailed, ProviderError, ProviderUnsupportedInBrowser
from ..models import ConversationTurn, ProviderId
from .base import ProviderAdapter


__all__ = ["AnthropicAdapter", "AnthropicMessagesHandle"]


logger = logging.getLogger(__name__)


_CROSS_ORIGIN_MARKERS = ("cors", "cross-origin")


@dataclass
class AnthropicMessagesHandle:
    """Message list without the system instruction, which is kept apart."""

    system_instruction: str
    messages: list[dict[str, str]] = field(default_factory=list)


class AnthropicAdapter(ProviderAdapter[AnthropicMessagesHandle]):
    """Variant A: replayed list plus out-of-band system instruction."""

    provider = ProviderId.ANTHROPIC

    def _create_client(self, api_key: str) -> Any:
        return AsyncAnthropic(api_key=api_key)

    def _new_handle(self, client: Any, system_instruction: str) -> AnthropicMessagesHandle:
        return AnthropicMessagesHandle(system_instruction=system_instruction)

    def _record_user_turn(self, handle: AnthropicMessagesHandle, user_text: str) -> None:
        handle.messages.append({"role": "user", "content": user_text})

    def _record_model_turn(self, handle: AnthropicMessagesHandle, text: str) -> None:
        handle.messages.append({"role": "assistant", "content": text})

    def _discard_user_turn(self, handle: AnthropicMessagesHandle) -> None:
        if handle.messages and handle.messages[-1]["role"] == "user":
            handle.messages.pop()

    async def _stream_deltas(
        self, handle: AnthropicMessagesHandle, user_text: str
    ) -> AsyncIterator[str]:
        stream = await self._client_for().messages.create(
            model=self.model,
            max_tokens=self.settings.anthropic_max_tokens,
            temperature=self.settings.temperature,
            system=handle.system_instruction,
            messages=list(handle.messages),
            stream=True,
        )
        async for event in stream:
            if event.type == "content_block_delta" and event.delta.type == "text_delta":
                yield event.delta.text or ""

    def _translate_error(self, exc: Exception) -> ProviderError:
        message = str(exc).lower()
        if any(marker in message for marker in _CROSS_ORIGIN_MARKERS):
            logger.warning("Anthropic call blocked by a cross-origin restriction")
            return ProviderUnsupportedInBrowser(self.provider.value, exc)
        return ProviderCallFailed(self.provider.value, exc)

    def history(self, handle: AnthropicMessagesHandle) -> list[ConversationTurn]:
        return [
            ConversationTurn(
                role="model" if m["role"] == "assistant" else "user",
                text=m["content"],
            )
            for m in handle.messages
        ]
