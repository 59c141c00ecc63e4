"""
OpenAI chat completions adapter.

Resends the whole message list, system instruction first, on every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, AsyncIterator

from openai import AsyncOpenAI

from ..models import ConversationTurn, ProviderId
from .base import ProviderAdapter


__all__ = ["OpenAIAdapter", "OpenAIMessagesHandle"]


@dataclass
class OpenAIMessagesHandle:
    """Accumulated message list, starting with the system message."""

    messages: list[dict[str, str]] = field(default_factory=list)


class OpenAIAdapter(ProviderAdapter[OpenAIMessagesHandle]):
    """Variant O: flat replayed message list including the instruction."""

    provider = ProviderId.OPENAI

    def _create_client(self, api_key: str) -> Any:
        return AsyncOpenAI(api_key=api_key)

    def _new_handle(self, client: Any, system_instruction: str) -> OpenAIMessagesHandle:
        return OpenAIMessagesHandle(
            messages=[{"role": "system", "content": system_instruction}]
        )

    def _record_user_turn(self, handle: OpenAIMessagesHandle, user_text: str) -> None:
        handle.messages.append({"role": "user", "content": user_text})

    def _record_model_turn(self, handle: OpenAIMessagesHandle, text: str) -> None:
        handle.messages.append({"role": "assistant", "content": text})

    def _discard_user_turn(self, handle: OpenAIMessagesHandle) -> None:
        if handle.messages and handle.messages[-1]["role"] == "user":
            handle.messages.pop()

    async def _stream_deltas(
        self, handle: OpenAIMessagesHandle, user_text: str
    ) -> AsyncIterator[str]:
        stream = await self._client_for().chat.completions.create(
            model=self.model,
            messages=list(handle.messages),
            temperature=self.settings.temperature,
            stream=True,
        )
        async for chunk in stream:
            if not chunk.choices:
                continue
            yield chunk.choices[0].delta.content or ""

    def history(self, handle: OpenAIMessagesHandle) -> list[ConversationTurn]:
        return [
            ConversationTurn(
                role="model" if m["role"] == "assistant" else "user",
                text=m["content"],
            )
            for m in handle.messages
            if m["role"] != "system"
        ]
