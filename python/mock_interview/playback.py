"""
Utterance Player.

Fire-and-forget text-to-speech for the latest model turn. A new utterance
always cancels the current one, and playback can be cancelled at any time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence


__all__ = ["SynthesisEngine", "Utterance", "UtterancePlayer", "PREFERRED_VOICES"]


logger = logging.getLogger(__name__)


# First match wins.
PREFERRED_VOICES: tuple[str, ...] = ("Google US English", "Samantha")


@dataclass(eq=False)
class Utterance:
    """One playback request handed to the engine."""

    text: str
    rate: float = 1.0
    pitch: float = 1.0
    voice: Optional[str] = None
    player: Optional["UtterancePlayer"] = field(default=None, repr=False)

    def finished(self) -> None:
        """Called by the engine on natural completion."""
        if self.player is not None:
            self.player._utterance_done(self, None)

    def failed(self, error: str) -> None:
        """Called by the engine on error, including interruption."""
        if self.player is not None:
            self.player._utterance_done(self, error)


class SynthesisEngine(Protocol):
    """A speech synthesizer that plays one utterance at a time."""

    def voices(self) -> Sequence[str]: ...

    def speak(self, utterance: Utterance) -> None: ...

    def cancel(self) -> None: ...


class UtterancePlayer:
    """
    Speaks model replies through a synthesis engine.

    ``speak`` never blocks; ``is_speaking`` stays true until the engine
    reports completion or an error for the current utterance.
    """

    def __init__(self, engine: SynthesisEngine) -> None:
        self._engine = engine
        self._current: Optional[Utterance] = None
        self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    @property
    def current(self) -> Optional[Utterance]:
        return self._current

    def speak(self, text: str) -> Optional[Utterance]:
        """Cancel any current playback and start speaking ``text``."""
        if not text or not text.strip():
            return None

        self.cancel()

        utterance = Utterance(text=text, voice=self._pick_voice(), player=self)
        self._current = utterance
        self._speaking = True
        logger.debug("Speaking %d chars (voice=%s)", len(text), utterance.voice)
        self._engine.speak(utterance)
        return utterance

    def cancel(self) -> None:
        """Stop playback immediately. Safe to call when idle."""
        if self._current is None and not self._speaking:
            return
        self._current = None
        self._speaking = False
        self._engine.cancel()

    def _pick_voice(self) -> Optional[str]:
        available = list(self._engine.voices())
        for preferred in PREFERRED_VOICES:
            match = next((v for v in available if preferred in v), None)
            if match is not None:
                return match
        return None

    def _utterance_done(self, utterance: Utterance, error: Optional[str]) -> None:
        # Late events from a cancelled utterance must not clear the flag.
        if utterance is not self._current:
            return
        if error is not None:
            logger.warning("Speech synthesis error: %s", error)
        self._current = None
        self._speaking = False
