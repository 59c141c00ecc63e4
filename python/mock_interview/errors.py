"""
Error taxonomy for the interview session runtime.

Provider and session errors propagate to the caller of
``ConversationSession.send_turn``. Capture errors only cross the
speech supervisor boundary for the two terminal kinds.

Last Grunted: 10/17/2026
"""

from __future__ import annotations

from typing import Optional


__all__ = [
    "InterviewRuntimeError",
    "ProviderError",
    "ProviderNotConfigured",
    "ProviderCallFailed",
    "ProviderUnsupportedInBrowser",
    "SessionNotStarted",
    "UnknownModel",
    "CaptureError",
    "PermissionDenied",
    "DeviceUnavailable",
    "CaptureAlreadyStarted",
]


class InterviewRuntimeError(Exception):
    """Base class for all runtime errors."""


# =============================================================================
# Provider / session errors
# =============================================================================

class ProviderError(InterviewRuntimeError):
    """Raised for failures scoped to one provider."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderNotConfigured(ProviderError):
    """Raised when no credential is available for a provider."""

    def __init__(self, provider: str, env_var: Optional[str] = None) -> None:
        self.env_var = env_var
        hint = f" Set {env_var}." if env_var else ""
        super().__init__(provider, f"Provider '{provider}' is not configured.{hint}")


class ProviderCallFailed(ProviderError):
    """Raised when a provider request or its stream fails."""

    def __init__(
        self,
        provider: str,
        cause: Exception,
        message: Optional[str] = None,
    ) -> None:
        self.cause = cause
        super().__init__(
            provider,
            message or f"Call to provider '{provider}' failed: {cause}",
        )


class ProviderUnsupportedInBrowser(ProviderCallFailed):
    """
    Raised when a provider rejects the call because of a cross-origin
    restriction.

    The vendor only accepts these calls from a server-side proxy, so the
    caller should tell the user to route the provider through one instead
    of showing a generic failure.
    """

    def __init__(self, provider: str, cause: Exception) -> None:
        super().__init__(
            provider,
            cause,
            f"Provider '{provider}' rejected a direct client call (cross-origin "
            f"restriction). Route it through a backend proxy: {cause}",
        )


class SessionNotStarted(InterviewRuntimeError):
    """Raised when a turn is sent before ``start()``."""

    def __init__(self) -> None:
        super().__init__("Session not started. Call start() first.")


class UnknownModel(InterviewRuntimeError):
    """Raised when a model id has no provider mapping."""

    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"Unknown model: {model}")


# =============================================================================
# Capture errors
# =============================================================================

class CaptureError(InterviewRuntimeError):
    """Terminal, user-facing failure of the speech capture stream."""

    def __init__(self, code: str, message: str, cause: Optional[Exception] = None) -> None:
        self.code = code
        self.cause = cause
        super().__init__(message)


class PermissionDenied(CaptureError):
    """Microphone access was refused."""

    def __init__(self, code: str = "not-allowed", cause: Optional[Exception] = None) -> None:
        super().__init__(
            code,
            "Microphone access denied. Allow microphone access and try again.",
            cause,
        )


class DeviceUnavailable(CaptureError):
    """The capture device could not be opened."""

    def __init__(self, code: str = "audio-capture", cause: Optional[Exception] = None) -> None:
        super().__init__(
            code,
            "Could not capture audio from the microphone. Check that it is "
            "connected and not in use by another application.",
            cause,
        )


class CaptureAlreadyStarted(InterviewRuntimeError):
    """Raised by a recognition engine when ``start()`` finds it running."""
