"""
Gemini adapter (google-genai).

Keeps a persistent server-side chat handle created at ``init``; the SDK
chat object owns the history and only records an exchange once its stream
has completed, so this adapter never resends or edits history itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, AsyncIterator

from google import genai
from google.genai import types

from ..models import ConversationTurn, ProviderId
from .base import ProviderAdapter


__all__ = ["GoogleAdapter", "GoogleChatHandle"]


@dataclass
class GoogleChatHandle:
    """Live remote chat for one session."""

    chat: Any
    system_instruction: str


class GoogleAdapter(ProviderAdapter[GoogleChatHandle]):
    """Variant G: persistent remote conversation handle."""

    provider = ProviderId.GOOGLE

    def _create_client(self, api_key: str) -> Any:
        return genai.Client(api_key=api_key)

    def _new_handle(self, client: Any, system_instruction: str) -> GoogleChatHandle:
        chat = client.aio.chats.create(
            model=self.model,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                temperature=self.settings.temperature,
            ),
        )
        return GoogleChatHandle(chat=chat, system_instruction=system_instruction)

    async def _stream_deltas(
        self, handle: GoogleChatHandle, user_text: str
    ) -> AsyncIterator[str]:
        response = await handle.chat.send_message_stream(user_text)
        async for chunk in response:
            yield chunk.text or ""

    def history(self, handle: GoogleChatHandle) -> list[ConversationTurn]:
        turns: list[ConversationTurn] = []
        for content in handle.chat.get_history():
            text = "".join(part.text or "" for part in (content.parts or []))
            role = "model" if content.role == "model" else "user"
            turns.append(ConversationTurn(role=role, text=text))
        return turns
