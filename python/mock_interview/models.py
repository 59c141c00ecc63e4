"""
Pydantic models for the interview session runtime.

Defines the session configuration, the closed model/provider catalog,
conversation turns, display messages, and speech recognition results.

Last Grunted: 10/17/2026
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderId(str, Enum):
    """Vendors that back a conversation. Always derived from a model id."""

    GOOGLE = "google"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ModelId(str, Enum):
    """Closed set of selectable chat models."""

    FLASH = "gemini-2.5-flash"
    PRO = "gemini-3-pro-preview"
    GPT4O = "gpt-4o"
    GPT4O_MINI = "gpt-4o-mini"
    SONNET_4 = "claude-sonnet-4-20250514"


class PromptStyle(str, Enum):
    """Interview styles, each resolved to a system instruction template."""

    TECHNICAL = "TECHNICAL"
    BEHAVIORAL = "BEHAVIORAL"


class ModelInfo(BaseModel):
    """Catalog entry shown by the setup form and the CLI."""

    model_config = ConfigDict(frozen=True)

    id: ModelId
    name: str
    provider: ProviderId
    description: str


class SessionConfig(BaseModel):
    """
    Configuration for one interview.

    Immutable once the session starts. ``model`` is kept as a plain string
    so an id outside the catalog surfaces as ``UnknownModel`` at
    ``start()`` time rather than as a validation error here.

    Example:
        >>> config = SessionConfig(
        ...     model=ModelId.FLASH,
        ...     style=PromptStyle.BEHAVIORAL,
        ...     role="Backend Engineer",
        ...     topic="Distributed systems",
        ... )
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Chat model id, e.g. 'gemini-2.5-flash'")
    style: PromptStyle = Field(..., description="Interview style")
    role: str = Field(default="", description="Target job role")
    topic: str = Field(default="", description="Focus topic for the interview")
    candidate_name: str = Field(default="", description="Shown in the UI only")

    @field_validator("model", mode="before")
    @classmethod
    def _plain_model_id(cls, value: object) -> object:
        if isinstance(value, ModelId):
            return value.value
        return value


class ConversationTurn(BaseModel):
    """
    One turn exactly as it was sent to or received from the provider.

    Independent of any display id or timestamp.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    text: str


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class Message(BaseModel):
    """
    A transcript entry as displayed to the candidate.

    ``text`` for user messages is the raw input, without the elapsed-time
    annotation that was sent to the model.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    role: Literal["user", "model"]
    text: str = ""
    timestamp: int = Field(default_factory=_now_ms, description="Epoch milliseconds")


class RecognitionResult(BaseModel):
    """A single recognition hypothesis for one utterance."""

    transcript: str
    is_final: bool = False
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class RecognitionResultEvent(BaseModel):
    """
    Result batch delivered by a continuous recognition engine.

    ``results`` holds every result of the current recognition session;
    only entries from ``result_index`` onward changed in this event.
    """

    result_index: int = 0
    results: list[RecognitionResult] = Field(default_factory=list)
