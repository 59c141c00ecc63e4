"""
Conversation Session.

Owns exactly one provider adapter, the session's immutable system
instruction, and the turn history for one interview.

Thread Safety:
    This class is NOT thread-safe, and at most one ``send_turn`` may be in
    flight at a time. Serializing turns is the caller's job; the session
    does not arbitrate.

Last Grunted: 10/17/2026
"""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import Any, Callable, Optional

from .config import RuntimeSettings, load_settings, provider_for_model
from .errors import SessionNotStarted
from .models import ConversationTurn, ProviderId, SessionConfig
from .providers import AdapterFactory, ProviderAdapter, create_adapter
from .styles import build_system_instruction


__all__ = ["ConversationSession", "PartialCallback"]


logger = logging.getLogger(__name__)


PartialCallback = Callable[[str], None]


class ConversationSession:
    """
    Provider-agnostic streaming conversation.

    Responsibilities:
        - Resolve the provider from the model id and the system
          instruction from the style
        - Hold one provider handle at a time, replaced on every ``start``
        - Forward cumulative snapshots to the caller and record completed
          exchanges

    Example:
        >>> session = ConversationSession()
        >>> session.start(config)
        >>> final = await session.send_turn(
        ...     "Hello, I am ready. [Time: 0:00]",
        ...     on_partial=lambda text: print(text),
        ... )
    """

    def __init__(
        self,
        settings: Optional[RuntimeSettings] = None,
        adapter_factory: AdapterFactory = create_adapter,
    ) -> None:
        """
        Initialize an idle session.

        Args:
            settings: Credentials and tunables. Loaded from the environment
                      when omitted.
            adapter_factory: Builds the adapter for a model id.
        """
        self._settings = settings if settings is not None else load_settings()
        self._adapter_factory = adapter_factory
        self._config: Optional[SessionConfig] = None
        self._provider: Optional[ProviderId] = None
        self._system_instruction: str = ""
        self._adapter: Optional[ProviderAdapter] = None
        self._handle: Any = None
        self._turns: list[ConversationTurn] = []

    @property
    def is_started(self) -> bool:
        return self._adapter is not None

    @property
    def settings(self) -> RuntimeSettings:
        return self._settings

    @property
    def config(self) -> Optional[SessionConfig]:
        return self._config

    @property
    def provider(self) -> Optional[ProviderId]:
        return self._provider

    @property
    def system_instruction(self) -> str:
        return self._system_instruction

    @property
    def adapter(self) -> Optional[ProviderAdapter]:
        return self._adapter

    @property
    def turns(self) -> list[ConversationTurn]:
        """Completed exchanges, oldest first (copy)."""
        return list(self._turns)

    def replay_state(self) -> list[ConversationTurn]:
        """Turns as the adapter will replay them on the next call."""
        if self._adapter is None:
            return []
        return self._adapter.history(self._handle)

    def start(self, config: SessionConfig) -> None:
        """
        Begin a new conversation, discarding any previous one.

        Must not be called while a ``send_turn`` is in flight.

        Raises:
            UnknownModel: If ``config.model`` is not in the catalog. Raised
                before any adapter is built.
            ProviderNotConfigured: If the provider has no credential.
        """
        provider = provider_for_model(config.model)
        instruction = build_system_instruction(config.style, config.role, config.topic)

        # Drop the previous handle first so a failed init leaves no stale state.
        self._adapter = None
        self._handle = None
        self._turns = []
        self._config = None
        self._provider = None
        self._system_instruction = ""

        adapter = self._adapter_factory(config.model, self._settings)
        handle = adapter.init(instruction)

        self._config = config
        self._provider = provider
        self._system_instruction = instruction
        self._adapter = adapter
        self._handle = handle

        logger.info(
            "Started conversation: provider=%s model=%s style=%s",
            provider.value,
            config.model,
            config.style.value,
        )

    async def send_turn(
        self,
        text: str,
        on_partial: Optional[PartialCallback] = None,
    ) -> str:
        """
        Send one user turn and stream the reply.

        ``on_partial`` is called synchronously with every cumulative
        snapshot, in order.

        Args:
            text: User text, passed through verbatim.
            on_partial: Receives each cumulative snapshot.

        Returns:
            The complete model reply.

        Raises:
            SessionNotStarted: If ``start()`` has not been called.
            ProviderCallFailed: If the provider call fails. History is left
                exactly as it was before the call.
        """
        if self._adapter is None:
            raise SessionNotStarted()

        adapter = self._adapter
        handle = self._handle
        final_text = ""
        try:
            async with aclosing(adapter.stream(handle, text)) as snapshots:
                async for snapshot in snapshots:
                    final_text = snapshot
                    if on_partial is not None:
                        on_partial(snapshot)
        except Exception:
            logger.exception("Turn failed on %s", adapter.provider.value)
            raise

        # start() may have replaced the conversation while this turn ran.
        if handle is self._handle:
            self._turns.append(ConversationTurn(role="user", text=text))
            self._turns.append(ConversationTurn(role="model", text=final_text))
        logger.debug("Turn complete (%d chars, %d turns)", len(final_text), len(self._turns))
        return final_text
