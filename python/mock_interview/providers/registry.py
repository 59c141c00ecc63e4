"""
Model -> adapter selection.

The provider is always derived from the model id through the static
catalog in ``config``; it is never inferred from which SDK clients happen
to be available.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from ..config import RuntimeSettings, provider_for_model
from ..models import ProviderId
from .anthropic_adapter import AnthropicAdapter
from .base import ProviderAdapter
from .google_adapter import GoogleAdapter
from .openai_adapter import OpenAIAdapter


AdapterFactory = Callable[[str, RuntimeSettings], ProviderAdapter]


_ADAPTERS: Mapping[ProviderId, type[ProviderAdapter]] = {
    ProviderId.GOOGLE: GoogleAdapter,
    ProviderId.OPENAI: OpenAIAdapter,
    ProviderId.ANTHROPIC: AnthropicAdapter,
}


def create_adapter(
    model: str,
    settings: RuntimeSettings,
    client: Optional[Any] = None,
) -> ProviderAdapter:
    """
    Build the adapter that serves ``model``.

    Raises:
        UnknownModel: If the model is not in the catalog.
    """
    provider = provider_for_model(model)
    return _ADAPTERS[provider](model, settings, client=client)
