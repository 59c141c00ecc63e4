"""
Provider adapters: one streaming-turn contract over three vendor protocols.
"""

from .anthropic_adapter import AnthropicAdapter, AnthropicMessagesHandle
from .base import ProviderAdapter
from .google_adapter import GoogleAdapter, GoogleChatHandle
from .openai_adapter import OpenAIAdapter, OpenAIMessagesHandle
from .registry import AdapterFactory, create_adapter

__all__ = [
    "AdapterFactory",
    "AnthropicAdapter",
    "AnthropicMessagesHandle",
    "GoogleAdapter",
    "GoogleChatHandle",
    "OpenAIAdapter",
    "OpenAIMessagesHandle",
    "ProviderAdapter",
    "create_adapter",
]
