"""
Interview Orchestrator.

Thin layer between a front end and the runtime core: keeps the displayed
transcript and the editable input buffer, annotates outgoing answers with
the elapsed interview time, serializes turns, and hands finished replies
to the utterance player.

Thread Safety:
    Single event loop only. All callbacks (stream snapshots, recognition
    results, synthesis events) are expected on that loop.

Last Grunted: 10/17/2026
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .conversation import ConversationSession
from .errors import CaptureError, InterviewRuntimeError, PermissionDenied
from .models import Message, SessionConfig
from .playback import SynthesisEngine, UtterancePlayer
from .speech import RecognitionEngine, SpeechCaptureSupervisor
from .styles.shared_content import FEEDBACK_MESSAGE, GREETING_PROMPT
from .transcription import AudioTranscriber


__all__ = ["InterviewOrchestrator", "annotate_elapsed", "format_elapsed"]


logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as zero-padded ``MM:SS``."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def annotate_elapsed(text: str, seconds: float) -> str:
    """Append the ``[Time: MM:SS]`` marker sent with every answer."""
    return f"{text} [Time: {format_elapsed(seconds)}]"


class InterviewOrchestrator:
    """
    Drives one interview from greeting to feedback.

    Voice is optional: without a recognition engine the candidate types,
    without a synthesis engine replies are only shown.

    Example:
        >>> orchestrator = InterviewOrchestrator(config, ConversationSession())
        >>> await orchestrator.begin()
        >>> orchestrator.input_text = "I have six years of Python experience."
        >>> await orchestrator.send()
        >>> feedback = orchestrator.end_interview()
    """

    def __init__(
        self,
        config: SessionConfig,
        conversation: ConversationSession,
        recognition_engine: Optional[RecognitionEngine] = None,
        synthesis_engine: Optional[SynthesisEngine] = None,
        transcriber: Optional[AudioTranscriber] = None,
        on_update: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        restart_delay: Optional[float] = None,
    ) -> None:
        self.config = config
        self.conversation = conversation
        self.messages: list[Message] = []
        self.input_text = ""
        self.is_processing = False
        self.is_ending = False
        self.tts_enabled = synthesis_engine is not None
        self.microphone_denied = False
        self.last_error: Optional[Exception] = None

        self._transcriber = transcriber
        self._on_update = on_update
        self._clock = clock
        self._started_at = clock()

        self.player: Optional[UtterancePlayer] = (
            UtterancePlayer(synthesis_engine) if synthesis_engine is not None else None
        )
        self.supervisor: Optional[SpeechCaptureSupervisor] = None
        if recognition_engine is not None:
            self.supervisor = SpeechCaptureSupervisor(
                recognition_engine,
                on_final=self._append_transcript,
                on_interim=lambda _text: self._notify(),
                on_error=self._capture_failed,
                restart_delay=(
                    restart_delay
                    if restart_delay is not None
                    else conversation.settings.restart_delay_seconds
                ),
                language=conversation.settings.recognition_language,
            )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def elapsed_seconds(self) -> int:
        return int(self._clock() - self._started_at)

    @property
    def is_listening(self) -> bool:
        return self.supervisor is not None and self.supervisor.desired

    @property
    def interim_text(self) -> str:
        return self.supervisor.interim_text if self.supervisor is not None else ""

    @property
    def is_speaking(self) -> bool:
        return self.player is not None and self.player.is_speaking

    # -------------------------------------------------------------------------
    # Turns
    # -------------------------------------------------------------------------

    async def begin(self) -> Optional[str]:
        """
        Start the conversation and let the model open the interview.

        Raises:
            UnknownModel: If the configured model is not in the catalog.
            ProviderNotConfigured: If the provider has no credential.
        """
        self.conversation.start(self.config)
        self._started_at = self._clock()
        logger.info("Interview started for role '%s'", self.config.role)
        return await self._run_turn(GREETING_PROMPT)

    async def send(self) -> Optional[str]:
        """
        Send the current input buffer as the candidate's answer.

        Returns:
            The model's complete reply, or None if nothing was sent or the
            turn failed (see ``last_error``).
        """
        text = self.input_text.strip()
        if not text or self.is_processing or self.is_ending:
            return None

        if self.is_listening:
            self.supervisor.stop_listening()

        outgoing = annotate_elapsed(text, self.elapsed_seconds)
        self.messages.append(Message(role="user", text=text))
        self.input_text = ""
        return await self._run_turn(outgoing)

    async def _run_turn(self, outgoing: str) -> Optional[str]:
        reply = Message(role="model", text="")
        self.messages.append(reply)
        self.is_processing = True
        self.last_error = None
        self._notify()

        def on_partial(snapshot: str) -> None:
            reply.text = snapshot
            self._notify()

        try:
            full_text = await self.conversation.send_turn(outgoing, on_partial)
        except InterviewRuntimeError as exc:
            logger.error("Turn failed: %s", exc)
            self.last_error = exc
            if not reply.text and reply in self.messages:
                self.messages.remove(reply)
            return None
        finally:
            self.is_processing = False
            self._notify()

        reply.text = full_text
        if self.tts_enabled and self.player is not None and not self.is_ending:
            self.player.speak(full_text)
        return full_text

    # -------------------------------------------------------------------------
    # Voice
    # -------------------------------------------------------------------------

    def toggle_listening(self) -> bool:
        """
        Flip capture on or off.

        Playback is always cancelled before capture starts.

        Returns:
            Whether listening is requested afterwards.
        """
        if self.supervisor is None:
            logger.warning("Speech recognition is not available")
            return False
        if self.supervisor.desired:
            self.supervisor.stop_listening()
        elif not self.microphone_denied and not self.is_ending:
            if self.player is not None:
                self.player.cancel()
            self.supervisor.start_listening()
        self._notify()
        return self.supervisor.desired

    def toggle_tts(self) -> bool:
        self.tts_enabled = not self.tts_enabled
        if not self.tts_enabled and self.player is not None:
            self.player.cancel()
        return self.tts_enabled

    async def submit_audio(self, audio: bytes, filename: str = "audio.webm") -> Optional[str]:
        """Transcribe a recorded clip and append it to the input buffer."""
        if self._transcriber is None:
            logger.warning("No audio transcriber configured")
            return None
        try:
            text = await self._transcriber.transcribe(audio, filename=filename)
        except InterviewRuntimeError as exc:
            self.last_error = exc
            return None
        if text.strip():
            self._append_transcript(text.strip() + " ")
        return text

    def _append_transcript(self, text: str) -> None:
        self.input_text += text
        self._notify()

    def _capture_failed(self, error: CaptureError) -> None:
        if isinstance(error, PermissionDenied):
            self.microphone_denied = True
        self.last_error = error
        self._notify()

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def end_interview(self) -> str:
        """Stop voice I/O and return the feedback text."""
        self.is_ending = True
        if self.player is not None:
            self.player.cancel()
        if self.supervisor is not None:
            self.supervisor.close()
        logger.info(
            "Interview ended after %s (%d messages)",
            format_elapsed(self.elapsed_seconds),
            len(self.messages),
        )
        self._notify()
        return FEEDBACK_MESSAGE

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update()
