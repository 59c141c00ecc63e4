"""
One-shot audio transcription (OpenAI Whisper).

Fallback for environments without live capture: submit a recorded clip,
receive its text. Independent of the speech capture supervisor.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from .config import RuntimeSettings
from .errors import ProviderCallFailed, ProviderNotConfigured
from .models import ProviderId


__all__ = ["AudioTranscriber"]


logger = logging.getLogger(__name__)


class AudioTranscriber:
    """
    Transcribes recorded audio clips.

    Example:
        >>> transcriber = AudioTranscriber(settings)
        >>> text = await transcriber.transcribe(webm_bytes)
    """

    def __init__(self, settings: RuntimeSettings, client: Optional[Any] = None) -> None:
        self._settings = settings
        self._client = client

    def _ensure_client(self) -> Any:
        if self._client is None:
            api_key = self._settings.api_key_for(ProviderId.OPENAI)
            if not api_key:
                raise ProviderNotConfigured(
                    ProviderId.OPENAI.value,
                    self._settings.key_env_name(ProviderId.OPENAI),
                )
            self._client = AsyncOpenAI(api_key=api_key)
        return self._client

    async def transcribe(
        self,
        audio: bytes,
        filename: str = "audio.webm",
        content_type: str = "audio/webm",
    ) -> str:
        """
        Transcribe one clip.

        Raises:
            ProviderNotConfigured: If OPENAI_API_KEY is not set.
            ProviderCallFailed: If the request fails.
        """
        client = self._ensure_client()
        try:
            transcription = await client.audio.transcriptions.create(
                file=(filename, audio, content_type),
                model=self._settings.transcription_model,
                language=self._settings.transcription_language,
            )
        except Exception as exc:
            logger.error("Error transcribing audio: %s", exc)
            raise ProviderCallFailed(ProviderId.OPENAI.value, exc) from exc

        text = transcription.text or ""
        logger.info("Transcribed %d bytes of audio into %d chars", len(audio), len(text))
        return text
