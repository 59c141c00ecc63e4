"""
Speech Capture Supervisor.

Keeps a continuous, interim-result-capable recognition stream alive while
the candidate wants to be heard. Recognition engines end sessions on their
own (silence, network hiccups, vendor time limits); the supervisor restarts
them after a short debounce, never runs two streams at once, and never
restarts a stream that was stopped on purpose.

State is two independent booleans reconciled here:

    desired  - listening was requested
    active   - the engine stream is running

``desired`` carries the abort semantics: a stop request clears it before
the stream's end arrives, so that end is never restarted, while a start
request made before the old stream has ended brings capture back once it
does. A separate stop flag, set whenever the supervisor stops the engine
and consumed by the next end, only tells the supervisor's own
``aborted`` error apart from one the engine raised by itself.

Engine contract (Web Speech vocabulary):
    - ``start()`` raises ``CaptureAlreadyStarted`` if a stream is running
    - ``stop()`` may complete asynchronously; ``handle_end`` follows
    - errors arrive as codes: ``no-speech``, ``aborted``, ``not-allowed``,
      ``service-not-allowed``, ``audio-capture``, ``network``, ...

Last Grunted: 10/17/2026
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from .config import DEFAULT_RESTART_DELAY_SECONDS
from .errors import CaptureAlreadyStarted, CaptureError, DeviceUnavailable, PermissionDenied
from .models import RecognitionResultEvent


__all__ = [
    "CaptureState",
    "RecognitionEngine",
    "RecognitionListener",
    "RestartTimer",
    "SpeechCaptureSupervisor",
]


logger = logging.getLogger(__name__)


# Engine error codes
NO_SPEECH = "no-speech"
ABORTED = "aborted"
NOT_ALLOWED = "not-allowed"
SERVICE_NOT_ALLOWED = "service-not-allowed"
AUDIO_CAPTURE = "audio-capture"


class CaptureState(str, Enum):
    """Observable supervisor state derived from desired/active."""

    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    RESTARTING = "restarting"
    STOPPING = "stopping"


class RecognitionListener(Protocol):
    """Callbacks a recognition engine delivers to its supervisor."""

    def handle_start(self) -> None: ...

    def handle_result(self, event: RecognitionResultEvent) -> None: ...

    def handle_error(self, code: str, message: Optional[str] = None) -> None: ...

    def handle_end(self) -> None: ...


class RecognitionEngine(Protocol):
    """A continuous speech recognizer with interim results."""

    lang: str

    def attach(self, listener: RecognitionListener) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


class RestartTimer:
    """
    Single-slot cancellable scheduled callback.

    Scheduling replaces any pending callback, so at most one restart is
    ever outstanding.
    """

    def __init__(self) -> None:
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()


class SpeechCaptureSupervisor:
    """
    Supervises one recognition engine on behalf of the interview.

    Only confirmed (final) fragments reach ``on_final``; provisional
    fragments go to ``on_interim`` for transient display and are never
    meant to be appended anywhere.

    Example:
        >>> supervisor = SpeechCaptureSupervisor(
        ...     engine,
        ...     on_final=lambda text: buffer.append(text),
        ...     on_error=lambda err: print(err),
        ... )
        >>> supervisor.start_listening()
        >>> supervisor.stop_listening()
        >>> supervisor.close()
    """

    def __init__(
        self,
        engine: RecognitionEngine,
        on_final: Optional[Callable[[str], None]] = None,
        on_interim: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[CaptureError], None]] = None,
        restart_delay: float = DEFAULT_RESTART_DELAY_SECONDS,
        language: Optional[str] = None,
    ) -> None:
        """
        Args:
            engine: Recognition engine to supervise.
            on_final: Receives each batch of confirmed text, one trailing
                      space included.
            on_interim: Receives the current provisional text.
            on_error: Receives terminal capture errors.
            restart_delay: Debounce before restarting an ended stream.
            language: BCP 47 recognition language set on the engine, e.g.
                      ``en-US``. The engine default is kept when omitted.
        """
        self._engine = engine
        self._on_final = on_final
        self._on_interim = on_interim
        self._on_error = on_error
        self._restart_delay = restart_delay

        self._desired = False
        self._active = False
        self._stop_requested = False
        self._closed = False
        self._restart = RestartTimer()
        self._interim_text = ""
        self._last_error: Optional[CaptureError] = None

        if language:
            engine.lang = language
        engine.attach(self)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def restart_delay(self) -> float:
        return self._restart_delay

    @property
    def desired(self) -> bool:
        return self._desired

    @property
    def active(self) -> bool:
        return self._active

    @property
    def restart_pending(self) -> bool:
        return self._restart.pending

    @property
    def interim_text(self) -> str:
        return self._interim_text

    @property
    def last_error(self) -> Optional[CaptureError]:
        return self._last_error

    @property
    def state(self) -> CaptureState:
        if self._desired:
            if self._restart.pending:
                return CaptureState.RESTARTING
            return CaptureState.RUNNING if self._active else CaptureState.STARTING
        return CaptureState.STOPPING if self._active else CaptureState.IDLE

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def start_listening(self) -> None:
        """Request capture. No-op if a stream is already running."""
        if self._closed:
            logger.warning("start_listening called on a closed supervisor")
            return
        self._desired = True
        self._last_error = None
        self._restart.cancel()
        self._start_engine()

    def stop_listening(self) -> None:
        """Stop capture; the stream's natural end will not restart it."""
        self._desired = False
        self._restart.cancel()
        self._set_interim("")
        if self._active:
            self._stop_engine()

    def close(self) -> None:
        """Tear down: cancel any pending restart and stop regardless of state."""
        self._closed = True
        self._desired = False
        self._restart.cancel()
        self._set_interim("")
        self._stop_engine()
        logger.info("Speech capture closed")

    # -------------------------------------------------------------------------
    # Engine callbacks
    # -------------------------------------------------------------------------

    def handle_start(self) -> None:
        logger.info("Speech recognition started")
        self._active = True

    def handle_result(self, event: RecognitionResultEvent) -> None:
        finals: list[str] = []
        interim = ""
        for result in event.results[event.result_index:]:
            if result.is_final:
                fragment = result.transcript.strip()
                if fragment:
                    finals.append(fragment)
            else:
                interim += result.transcript

        if finals:
            text = " ".join(finals) + " "
            logger.debug("Final transcript fragment: %d chars", len(text))
            if self._on_final is not None:
                self._on_final(text)
        self._set_interim(interim)

    def handle_error(self, code: str, message: Optional[str] = None) -> None:
        if code == NO_SPEECH:
            logger.debug("No speech detected; ignoring")
            return

        if code == ABORTED:
            self._active = False
            if not self._stop_requested:
                # Aborted by the engine itself; listening is switched off quietly.
                logger.info("Speech recognition aborted by engine")
                self._stop_requested = True
                self._desired = False
                self._restart.cancel()
            return

        if code in (NOT_ALLOWED, SERVICE_NOT_ALLOWED):
            self._fail(PermissionDenied(code))
            return

        if code == AUDIO_CAPTURE:
            self._fail(DeviceUnavailable(code))
            return

        # Anything else ends the stream; handle_end decides on a restart.
        logger.warning("Speech recognition error: %s %s", code, message or "")

    def handle_end(self) -> None:
        self._active = False
        self._stop_requested = False

        if not self._desired or self._closed:
            logger.debug("Recognition ended; capture not requested")
            return

        logger.info("Recognition ended, restarting in %.2fs", self._restart_delay)
        self._restart.schedule(self._restart_delay, self._restart_now)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _restart_now(self) -> None:
        if not self._desired or self._closed:
            return
        self._start_engine()

    def _start_engine(self) -> None:
        if self._active:
            return
        try:
            self._engine.start()
        except CaptureAlreadyStarted:
            logger.debug("Engine reports already started; treating as running")
            self._active = True
            return
        except Exception as exc:
            logger.error("Error starting recognition: %s", exc)
            self._fail(DeviceUnavailable("start-failed", cause=exc))
            return
        self._active = True

    def _stop_engine(self) -> None:
        self._stop_requested = True
        try:
            self._engine.stop()
        except Exception as exc:
            logger.debug("Error stopping recognition: %s", exc)
        self._active = False

    def _fail(self, error: CaptureError) -> None:
        logger.error("Speech capture failed: %s", error)
        self._desired = False
        self._restart.cancel()
        self._set_interim("")
        self._last_error = error
        if self._on_error is not None:
            self._on_error(error)

    def _set_interim(self, text: str) -> None:
        if text == self._interim_text:
            return
        self._interim_text = text
        if self._on_interim is not None:
            self._on_interim(text)
