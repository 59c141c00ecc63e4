"""
Mock Interview Session Runtime.

Lets a candidate rehearse a spoken or typed interview against one of
three chat providers, with the reply streamed as it is generated and
optionally spoken aloud, while spoken answers are transcribed in the
background.

Components:
    - ConversationSession: One provider-agnostic streaming conversation
    - ProviderAdapter: Gemini / OpenAI / Anthropic request shapes behind one contract
    - SpeechCaptureSupervisor: Keeps continuous recognition alive without overlap
    - UtterancePlayer: Interruptible text-to-speech for model replies
    - AudioTranscriber: One-shot Whisper fallback
    - InterviewOrchestrator: Wires input, turns, and voice together

Example:
    >>> from mock_interview import ConversationSession, SessionConfig, ModelId, PromptStyle
    >>>
    >>> session = ConversationSession()
    >>> session.start(SessionConfig(
    ...     model=ModelId.FLASH,
    ...     style=PromptStyle.BEHAVIORAL,
    ...     role="Backend Engineer",
    ...     topic="APIs",
    ... ))
    >>> reply = await session.send_turn(
    ...     "Hello, I am ready for the interview. [Time: 0:00]",
    ...     on_partial=print,
    ... )

Last Grunted: 10/17/2026
"""

from .models import (
    ConversationTurn,
    Message,
    ModelId,
    ModelInfo,
    PromptStyle,
    ProviderId,
    RecognitionResult,
    RecognitionResultEvent,
    SessionConfig,
)

from .errors import (
    CaptureAlreadyStarted,
    CaptureError,
    DeviceUnavailable,
    InterviewRuntimeError,
    PermissionDenied,
    ProviderCallFailed,
    ProviderError,
    ProviderNotConfigured,
    ProviderUnsupportedInBrowser,
    SessionNotStarted,
    UnknownModel,
)

from .config import (
    AVAILABLE_MODELS,
    MODEL_PROVIDERS,
    RuntimeSettings,
    load_settings,
    provider_for_model,
)

from .providers import ProviderAdapter, create_adapter

from .conversation import ConversationSession

from .speech import CaptureState, RecognitionEngine, SpeechCaptureSupervisor

from .playback import SynthesisEngine, Utterance, UtterancePlayer

from .transcription import AudioTranscriber

from .orchestrator import InterviewOrchestrator


__all__ = [
    # Models
    "ConversationTurn",
    "Message",
    "ModelId",
    "ModelInfo",
    "PromptStyle",
    "ProviderId",
    "RecognitionResult",
    "RecognitionResultEvent",
    "SessionConfig",
    # Errors
    "CaptureAlreadyStarted",
    "CaptureError",
    "DeviceUnavailable",
    "InterviewRuntimeError",
    "PermissionDenied",
    "ProviderCallFailed",
    "ProviderError",
    "ProviderNotConfigured",
    "ProviderUnsupportedInBrowser",
    "SessionNotStarted",
    "UnknownModel",
    # Config
    "AVAILABLE_MODELS",
    "MODEL_PROVIDERS",
    "RuntimeSettings",
    "load_settings",
    "provider_for_model",
    # Conversation
    "ConversationSession",
    "ProviderAdapter",
    "create_adapter",
    # Voice
    "CaptureState",
    "RecognitionEngine",
    "SpeechCaptureSupervisor",
    "SynthesisEngine",
    "Utterance",
    "UtterancePlayer",
    "AudioTranscriber",
    # Orchestration
    "InterviewOrchestrator",
]

__version__ = "0.1.0"
