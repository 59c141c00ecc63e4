"""
Provider adapter contract.

Every vendor is driven through the same two calls:

    handle = adapter.init(system_instruction)
    async for snapshot in adapter.stream(handle, user_text):
        ...  # cumulative text so far

``stream`` yields cumulative snapshots, never deltas. The adapter's replay
state only ever holds complete exchanges: the user turn is recorded before
the request goes out, and either the model turn is recorded after the
stream completes or the user turn is rolled back if it fails.

Last Grunted: 10/17/2026
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Generic, Optional, TypeVar

from ..config import RuntimeSettings
from ..errors import ProviderCallFailed, ProviderError, ProviderNotConfigured
from ..models import ConversationTurn, ProviderId


__all__ = ["ProviderAdapter"]


logger = logging.getLogger(__name__)


HandleT = TypeVar("HandleT")


class ProviderAdapter(ABC, Generic[HandleT]):
    """
    Base class for one vendor's streaming chat protocol.

    Subclasses implement client construction, handle allocation, the raw
    delta stream, and the replay bookkeeping for their request shape.

    Attributes:
        provider: Vendor served by this adapter.
        model: Model id sent with every request.
    """

    provider: ProviderId

    def __init__(
        self,
        model: str,
        settings: RuntimeSettings,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        self.settings = settings
        self._client = client

    # -------------------------------------------------------------------------
    # Public contract
    # -------------------------------------------------------------------------

    def init(self, system_instruction: str) -> HandleT:
        """
        Allocate fresh adapter-local conversation state.

        Raises:
            ProviderNotConfigured: If no credential is available.
        """
        client = self._ensure_client()
        handle = self._new_handle(client, system_instruction)
        logger.info("Initialized %s conversation (model=%s)", self.provider.value, self.model)
        return handle

    async def stream(self, handle: HandleT, user_text: str) -> AsyncIterator[str]:
        """
        Send one user turn and yield cumulative text snapshots.

        The last snapshot is the complete model turn.

        Raises:
            ProviderCallFailed: If the request or the stream fails.
        """
        self._record_user_turn(handle, user_text)
        text = ""
        completed = False
        try:
            async for delta in self._stream_deltas(handle, user_text):
                if not delta:
                    continue
                text += delta
                logger.debug("%s chunk: +%d chars", self.provider.value, len(delta))
                yield text
            completed = True
        except ProviderError:
            raise
        except Exception as exc:
            raise self._translate_error(exc) from exc
        finally:
            if completed:
                self._record_model_turn(handle, text)
            else:
                self._discard_user_turn(handle)

    @abstractmethod
    def history(self, handle: HandleT) -> list[ConversationTurn]:
        """Return the replay state as user/model turns, oldest first."""

    # -------------------------------------------------------------------------
    # Subclass hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def _create_client(self, api_key: str) -> Any:
        """Build the vendor SDK client."""

    @abstractmethod
    def _new_handle(self, client: Any, system_instruction: str) -> HandleT:
        """Allocate the per-session handle."""

    @abstractmethod
    def _stream_deltas(self, handle: HandleT, user_text: str) -> AsyncIterator[str]:
        """Issue the request and yield raw text increments."""

    def _record_user_turn(self, handle: HandleT, user_text: str) -> None:
        """Append the user turn to replay state (no-op for remote handles)."""

    def _record_model_turn(self, handle: HandleT, text: str) -> None:
        """Append the completed model turn to replay state."""

    def _discard_user_turn(self, handle: HandleT) -> None:
        """Undo ``_record_user_turn`` after a failed call."""

    def _translate_error(self, exc: Exception) -> ProviderError:
        return ProviderCallFailed(self.provider.value, exc)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _ensure_client(self) -> Any:
        if self._client is None:
            api_key = self.settings.api_key_for(self.provider)
            if not api_key:
                raise ProviderNotConfigured(
                    self.provider.value,
                    self.settings.key_env_name(self.provider),
                )
            self._client = self._create_client(api_key)
            logger.info("%s client initialized", self.provider.value)
        return self._client

    def _client_for(self) -> Any:
        if self._client is None:
            raise ProviderNotConfigured(
                self.provider.value,
                self.settings.key_env_name(self.provider),
            )
        return self._client
