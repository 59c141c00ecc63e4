"""
Runtime configuration.

Loads credentials and tunables from the environment (and a ``.env`` file,
if present) into an immutable ``RuntimeSettings`` value. Also holds the
closed model catalog and its total model -> provider mapping.

Environment:
    GOOGLE_API_KEY (or GEMINI_API_KEY), OPENAI_API_KEY, ANTHROPIC_API_KEY
    INTERVIEW_TEMPERATURE            Sampling temperature (default: 0.7)
    ANTHROPIC_MAX_TOKENS             Output ceiling for Claude (default: 4096)
    CAPTURE_RESTART_DELAY_SECONDS    Capture restart debounce (default: 0.3)

Last Grunted: 10/17/2026
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Mapping, Optional

from dotenv import load_dotenv

from .errors import UnknownModel
from .models import ModelId, ModelInfo, ProviderId


__all__ = [
    "AVAILABLE_MODELS",
    "MODEL_PROVIDERS",
    "PROVIDER_KEY_ENV",
    "RuntimeSettings",
    "load_settings",
    "provider_for_model",
]


logger = logging.getLogger(__name__)


DEFAULT_TEMPERATURE: Final[float] = 0.7
DEFAULT_ANTHROPIC_MAX_TOKENS: Final[int] = 4096
DEFAULT_RESTART_DELAY_SECONDS: Final[float] = 0.3
DEFAULT_RECOGNITION_LANGUAGE: Final[str] = "en-US"
DEFAULT_TRANSCRIPTION_MODEL: Final[str] = "whisper-1"
DEFAULT_TRANSCRIPTION_LANGUAGE: Final[str] = "en"


# =============================================================================
# Model catalog
# =============================================================================

AVAILABLE_MODELS: Final[tuple[ModelInfo, ...]] = (
    ModelInfo(
        id=ModelId.FLASH,
        name="Gemini 2.5 Flash",
        provider=ProviderId.GOOGLE,
        description="Fast & Responsive",
    ),
    ModelInfo(
        id=ModelId.PRO,
        name="Gemini 3.0 Pro",
        provider=ProviderId.GOOGLE,
        description="Advanced Reasoning",
    ),
    ModelInfo(
        id=ModelId.GPT4O,
        name="GPT-4o",
        provider=ProviderId.OPENAI,
        description="Powerful & Versatile",
    ),
    ModelInfo(
        id=ModelId.GPT4O_MINI,
        name="GPT-4o Mini",
        provider=ProviderId.OPENAI,
        description="Fast & Affordable",
    ),
    ModelInfo(
        id=ModelId.SONNET_4,
        name="Claude Sonnet 4",
        provider=ProviderId.ANTHROPIC,
        description="Thoughtful & Precise",
    ),
)

MODEL_PROVIDERS: Final[Mapping[str, ProviderId]] = {
    info.id.value: info.provider for info in AVAILABLE_MODELS
}

# Each provider takes exactly one credential; aliases are tried in order.
PROVIDER_KEY_ENV: Final[Mapping[ProviderId, tuple[str, ...]]] = {
    ProviderId.GOOGLE: ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    ProviderId.OPENAI: ("OPENAI_API_KEY",),
    ProviderId.ANTHROPIC: ("ANTHROPIC_API_KEY",),
}


def provider_for_model(model: str) -> ProviderId:
    """
    Resolve the provider that serves a model id.

    Raises:
        UnknownModel: If the id is not in the catalog.
    """
    key = model.value if isinstance(model, ModelId) else model
    try:
        return MODEL_PROVIDERS[key]
    except KeyError:
        raise UnknownModel(str(key)) from None


# =============================================================================
# Settings
# =============================================================================

@dataclass(frozen=True)
class RuntimeSettings:
    """
    Credentials and tunables for one process.

    Built by ``load_settings()``; tests construct it directly.
    """

    api_keys: Mapping[ProviderId, str] = field(default_factory=dict)
    temperature: float = DEFAULT_TEMPERATURE
    anthropic_max_tokens: int = DEFAULT_ANTHROPIC_MAX_TOKENS
    restart_delay_seconds: float = DEFAULT_RESTART_DELAY_SECONDS
    recognition_language: str = DEFAULT_RECOGNITION_LANGUAGE
    transcription_model: str = DEFAULT_TRANSCRIPTION_MODEL
    transcription_language: str = DEFAULT_TRANSCRIPTION_LANGUAGE

    def api_key_for(self, provider: ProviderId) -> Optional[str]:
        """Return the credential for a provider, or None if absent."""
        return self.api_keys.get(provider) or None

    def key_env_name(self, provider: ProviderId) -> str:
        """Primary environment variable name for a provider's credential."""
        return PROVIDER_KEY_ENV[provider][0]


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> RuntimeSettings:
    """
    Build settings from the environment.

    When ``environ`` is None the process environment is used, after loading
    ``env_file`` (default: ``.env`` in the working directory) without
    overriding variables that are already set.

    Args:
        environ: Mapping to read instead of ``os.environ``.
        env_file: Optional path to a dotenv file.

    Returns:
        Frozen RuntimeSettings.
    """
    if environ is None:
        load_dotenv(env_file or Path.cwd() / ".env")
        environ = os.environ

    api_keys: dict[ProviderId, str] = {}
    for provider, names in PROVIDER_KEY_ENV.items():
        value = next((environ[n] for n in names if environ.get(n)), None)
        if value:
            api_keys[provider] = value

    logger.info(
        "API keys: %s",
        ", ".join(
            f"{p.value}={'set' if p in api_keys else 'not set'}"
            for p in PROVIDER_KEY_ENV
        ),
    )

    return RuntimeSettings(
        api_keys=api_keys,
        temperature=_read_float(environ, "INTERVIEW_TEMPERATURE", DEFAULT_TEMPERATURE),
        anthropic_max_tokens=_read_int(
            environ, "ANTHROPIC_MAX_TOKENS", DEFAULT_ANTHROPIC_MAX_TOKENS
        ),
        restart_delay_seconds=_read_float(
            environ, "CAPTURE_RESTART_DELAY_SECONDS", DEFAULT_RESTART_DELAY_SECONDS
        ),
        recognition_language=environ.get(
            "RECOGNITION_LANGUAGE", DEFAULT_RECOGNITION_LANGUAGE
        ),
    )
