"""
Prompt style plugin contract.
"""

from __future__ import annotations

from typing import ClassVar, Protocol


class PromptStylePlugin(Protocol):
    """Resolves an interview style to its system instruction."""

    style_id: str
    display_name: str

    def build_instruction(self, role: str, topic: str) -> str:
        ...


class BasePromptStyle:
    """Template-backed style; subclasses set ``template``."""

    style_id: ClassVar[str]
    display_name: ClassVar[str]
    template: ClassVar[str]

    def build_instruction(self, role: str, topic: str) -> str:
        return self.template.format(
            role=role.strip() or "the role",
            topic=topic.strip() or "general topics",
        ).strip()
