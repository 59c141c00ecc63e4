"""
Tests for the Interview Orchestrator.

Last Grunted: 10/17/2026
"""

from __future__ import annotations

import asyncio

import pytest

from mock_interview.config import load_settings
from mock_interview.conversation import ConversationSession
from mock_interview.errors import PermissionDenied, ProviderCallFailed, ProviderNotConfigured
from mock_interview.models import ModelId
from mock_interview.orchestrator import InterviewOrchestrator, annotate_elapsed, format_elapsed
from mock_interview.styles import FEEDBACK_MESSAGE
from mock_interview.transcription import AudioTranscriber
from tests.fakes import (
    FakeOpenAIClient,
    FakeRecognitionEngine,
    FakeSynthesisEngine,
    adapter_factory_for,
    make_config,
    make_settings,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _orchestrator(
    replies=None,
    recognition: bool = False,
    synthesis: bool = False,
    transcriber=None,
):
    client = FakeOpenAIClient(replies)
    clock = FakeClock()
    updates: list[int] = []
    conversation = ConversationSession(
        make_settings(), adapter_factory=adapter_factory_for(client)
    )
    orchestrator = InterviewOrchestrator(
        make_config(model=ModelId.GPT4O),
        conversation,
        recognition_engine=FakeRecognitionEngine() if recognition else None,
        synthesis_engine=FakeSynthesisEngine() if synthesis else None,
        transcriber=transcriber,
        on_update=lambda: updates.append(1),
        clock=clock,
    )
    return orchestrator, client, clock


def _last_user_message(client: FakeOpenAIClient) -> str:
    return client.requests[-1]["messages"][-1]["content"]


class TestElapsedFormat:
    """Tests for the elapsed-time annotation."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "00:00"), (5, "00:05"), (65, "01:05"), (600, "10:00"), (3725, "62:05")],
    )
    def test_format_elapsed(self, seconds, expected):
        assert format_elapsed(seconds) == expected

    def test_annotate_elapsed(self):
        assert annotate_elapsed("I used Kafka.", 187) == "I used Kafka. [Time: 03:07]"


# =============================================================================
# Turns
# =============================================================================

class TestTurns:
    """Tests for begin() and send()."""

    @pytest.mark.asyncio
    async def test_begin_sends_greeting_and_shows_reply(self):
        """The model speaks first; the greeting prompt is not displayed."""
        orchestrator, client, _ = _orchestrator(replies=[["Hi, welcome", " to the interview."]])

        reply = await orchestrator.begin()

        assert reply == "Hi, welcome to the interview."
        assert _last_user_message(client) == "Hello, I am ready for the interview. [Time: 0:00]"
        assert [(m.role, m.text) for m in orchestrator.messages] == [
            ("model", "Hi, welcome to the interview.")
        ]
        assert not orchestrator.is_processing

    @pytest.mark.asyncio
    async def test_begin_propagates_configuration_errors(self):
        settings = make_settings(api_keys={})
        orchestrator = InterviewOrchestrator(
            make_config(model=ModelId.GPT4O),
            ConversationSession(settings),
        )

        with pytest.raises(ProviderNotConfigured):
            await orchestrator.begin()

    @pytest.mark.asyncio
    async def test_send_annotates_outgoing_but_not_display(self):
        """The model sees [Time: MM:SS]; the transcript shows the raw answer."""
        orchestrator, client, clock = _orchestrator()
        await orchestrator.begin()
        clock.now += 125
        orchestrator.input_text = "  I have five years of Go.  "

        await orchestrator.send()

        assert _last_user_message(client) == "I have five years of Go. [Time: 02:05]"
        user_messages = [m for m in orchestrator.messages if m.role == "user"]
        assert user_messages[-1].text == "I have five years of Go."
        assert orchestrator.input_text == ""

    @pytest.mark.asyncio
    async def test_blank_input_is_not_sent(self):
        orchestrator, client, _ = _orchestrator()
        await orchestrator.begin()
        orchestrator.input_text = "   "

        assert await orchestrator.send() is None
        assert len(client.requests) == 1

    @pytest.mark.asyncio
    async def test_snapshots_update_the_live_message(self):
        """The model message grows with every snapshot."""
        orchestrator, _, _ = _orchestrator(replies=[["Hi"], ["Why", " Go", "?"]])
        await orchestrator.begin()
        seen: list[str] = []
        orchestrator._on_update = lambda: seen.append(orchestrator.messages[-1].text)
        orchestrator.input_text = "I like Go"

        await orchestrator.send()

        assert "Why" in seen
        assert "Why Go" in seen
        assert orchestrator.messages[-1].text == "Why Go?"

    @pytest.mark.asyncio
    async def test_failed_turn_is_reported_and_retryable(self):
        """A provider failure sets last_error and drops the empty placeholder."""
        orchestrator, client, _ = _orchestrator(
            replies=[["Hi"], ConnectionError("reset"), ["Thanks."]]
        )
        await orchestrator.begin()
        orchestrator.input_text = "My answer"

        assert await orchestrator.send() is None

        assert isinstance(orchestrator.last_error, ProviderCallFailed)
        assert not orchestrator.is_processing
        assert [m.role for m in orchestrator.messages] == ["model", "user"]

        orchestrator.input_text = "My answer"
        assert await orchestrator.send() == "Thanks."
        assert orchestrator.last_error is None
        assert len(orchestrator.conversation.turns) == 4


# =============================================================================
# Settings
# =============================================================================

class TestCaptureSettings:
    """Tests for capture settings flowing from the environment to the supervisor."""

    def test_restart_delay_override_reaches_supervisor(self):
        """CAPTURE_RESTART_DELAY_SECONDS sets the supervisor's debounce."""
        settings = load_settings(
            {"OPENAI_API_KEY": "o", "CAPTURE_RESTART_DELAY_SECONDS": "1.5"}
        )

        orchestrator = InterviewOrchestrator(
            make_config(model=ModelId.GPT4O),
            ConversationSession(settings),
            recognition_engine=FakeRecognitionEngine(),
        )

        assert orchestrator.supervisor.restart_delay == pytest.approx(1.5)

    def test_recognition_language_reaches_engine(self):
        """RECOGNITION_LANGUAGE is set on the engine; en-US by default."""
        default_engine = FakeRecognitionEngine()
        custom_engine = FakeRecognitionEngine()

        InterviewOrchestrator(
            make_config(model=ModelId.GPT4O),
            ConversationSession(load_settings({})),
            recognition_engine=default_engine,
        )
        InterviewOrchestrator(
            make_config(model=ModelId.GPT4O),
            ConversationSession(load_settings({"RECOGNITION_LANGUAGE": "en-GB"})),
            recognition_engine=custom_engine,
        )

        assert default_engine.lang == "en-US"
        assert custom_engine.lang == "en-GB"

    def test_explicit_restart_delay_wins(self):
        orchestrator = InterviewOrchestrator(
            make_config(model=ModelId.GPT4O),
            ConversationSession(make_settings(restart_delay_seconds=2.0)),
            recognition_engine=FakeRecognitionEngine(),
            restart_delay=0.1,
        )

        assert orchestrator.supervisor.restart_delay == pytest.approx(0.1)

    @pytest.mark.asyncio
    async def test_restart_uses_configured_delay(self):
        """An ended stream is not restarted before the configured debounce."""
        orchestrator = InterviewOrchestrator(
            make_config(model=ModelId.GPT4O),
            ConversationSession(make_settings(restart_delay_seconds=10.0)),
            recognition_engine=FakeRecognitionEngine(),
        )
        orchestrator.toggle_listening()
        engine = orchestrator.supervisor._engine

        engine.finish()
        await asyncio.sleep(0.05)

        assert orchestrator.supervisor.restart_pending
        assert engine.streams_started == 1
        orchestrator.end_interview()


# =============================================================================
# Voice
# =============================================================================

class TestVoice:
    """Tests for capture and playback wiring."""

    @pytest.mark.asyncio
    async def test_replies_are_spoken_when_tts_enabled(self):
        orchestrator, _, _ = _orchestrator(replies=[["Welcome."]], synthesis=True)

        await orchestrator.begin()

        assert orchestrator.is_speaking
        assert orchestrator.player.current.text == "Welcome."

    @pytest.mark.asyncio
    async def test_tts_toggle_off_cancels_and_mutes(self):
        orchestrator, _, _ = _orchestrator(replies=[["Welcome."], ["Next."]], synthesis=True)
        await orchestrator.begin()

        assert orchestrator.toggle_tts() is False
        assert not orchestrator.is_speaking

        orchestrator.input_text = "ok"
        await orchestrator.send()
        assert not orchestrator.is_speaking

    @pytest.mark.asyncio
    async def test_playback_cancelled_before_capture_starts(self):
        """Starting to listen always silences the interviewer first."""
        orchestrator, _, _ = _orchestrator(replies=[["Welcome."]], recognition=True, synthesis=True)
        await orchestrator.begin()
        assert orchestrator.is_speaking

        assert orchestrator.toggle_listening() is True

        assert not orchestrator.is_speaking
        assert orchestrator.is_listening

    @pytest.mark.asyncio
    async def test_final_transcripts_append_to_input(self):
        """Confirmed speech lands in the input buffer; interim text does not."""
        orchestrator, _, _ = _orchestrator(recognition=True)
        await orchestrator.begin()
        orchestrator.input_text = "Well, "
        orchestrator.toggle_listening()
        engine = orchestrator.supervisor._engine

        engine.results(("I led a team", True))
        engine.results(("of four", False))

        assert orchestrator.input_text == "Well, I led a team "
        assert orchestrator.interim_text == "of four"

    @pytest.mark.asyncio
    async def test_send_stops_listening(self):
        orchestrator, _, _ = _orchestrator(recognition=True)
        await orchestrator.begin()
        orchestrator.toggle_listening()
        orchestrator.input_text = "Done talking"

        await orchestrator.send()

        assert not orchestrator.is_listening

    @pytest.mark.asyncio
    async def test_permission_denied_disables_microphone(self):
        orchestrator, _, _ = _orchestrator(recognition=True)
        await orchestrator.begin()
        orchestrator.toggle_listening()
        engine = orchestrator.supervisor._engine

        engine.error("not-allowed")

        assert orchestrator.microphone_denied
        assert isinstance(orchestrator.last_error, PermissionDenied)
        assert not orchestrator.is_listening
        assert orchestrator.toggle_listening() is False

    def test_toggle_without_recognition_engine(self):
        orchestrator, _, _ = _orchestrator()

        assert orchestrator.toggle_listening() is False

    @pytest.mark.asyncio
    async def test_submit_audio_appends_transcript(self):
        """The Whisper fallback appends trimmed text plus one space."""
        audio_client = FakeOpenAIClient(transcript="  I used Redis for caching. ")
        transcriber = AudioTranscriber(make_settings(), client=audio_client)
        orchestrator, _, _ = _orchestrator(transcriber=transcriber)
        await orchestrator.begin()

        await orchestrator.submit_audio(b"\x1a\x45\xdf\xa3")

        assert orchestrator.input_text == "I used Redis for caching. "

    @pytest.mark.asyncio
    async def test_submit_audio_failure_sets_error(self):
        audio_client = FakeOpenAIClient(transcription_error=RuntimeError("bad audio"))
        transcriber = AudioTranscriber(make_settings(), client=audio_client)
        orchestrator, _, _ = _orchestrator(transcriber=transcriber)

        assert await orchestrator.submit_audio(b"") is None
        assert isinstance(orchestrator.last_error, ProviderCallFailed)
        assert orchestrator.input_text == ""


# =============================================================================
# Teardown
# =============================================================================

class TestEndInterview:
    """Tests for end_interview()."""

    @pytest.mark.asyncio
    async def test_end_stops_voice_and_returns_feedback(self):
        orchestrator, _, _ = _orchestrator(
            replies=[["Welcome."]], recognition=True, synthesis=True
        )
        await orchestrator.begin()
        orchestrator.toggle_listening()
        orchestrator.player.speak("Still talking")
        engine = orchestrator.supervisor._engine

        feedback = orchestrator.end_interview()

        assert feedback == FEEDBACK_MESSAGE
        assert orchestrator.is_ending
        assert not orchestrator.is_speaking
        assert not orchestrator.is_listening
        assert engine.stop_calls >= 1

    @pytest.mark.asyncio
    async def test_no_turns_after_end(self):
        orchestrator, client, _ = _orchestrator()
        await orchestrator.begin()
        orchestrator.end_interview()
        orchestrator.input_text = "one more thing"

        assert await orchestrator.send() is None
        assert len(client.requests) == 1
