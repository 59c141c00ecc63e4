"""
Prompt style registry.
"""

from __future__ import annotations

from ..models import PromptStyle
from .base import PromptStylePlugin
from .behavioral import BehavioralPromptStyle
from .technical import TechnicalPromptStyle


def _build_registry() -> dict[str, PromptStylePlugin]:
    plugins: tuple[PromptStylePlugin, ...] = (
        TechnicalPromptStyle(),
        BehavioralPromptStyle(),
    )
    return {plugin.style_id: plugin for plugin in plugins}


_REGISTRY = _build_registry()


def available_styles() -> tuple[str, ...]:
    """Return all supported style IDs."""
    return tuple(sorted(_REGISTRY.keys()))


def load_style(style_id: str | PromptStyle) -> PromptStylePlugin:
    """Load a style plugin by ID."""
    raw = style_id.value if isinstance(style_id, PromptStyle) else style_id
    normalized = (raw or "").strip().upper()
    if not normalized:
        raise ValueError("Style id is empty. Pass --style.")

    plugin = _REGISTRY.get(normalized)
    if plugin is None:
        supported = ", ".join(available_styles())
        raise ValueError(
            f"Unknown style '{style_id}'. Supported styles: {supported}."
        )
    return plugin


def build_system_instruction(style: str | PromptStyle, role: str, topic: str) -> str:
    """Resolve a style to the system instruction for one session."""
    return load_style(style).build_instruction(role, topic)
