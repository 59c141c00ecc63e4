"""
Prompt style plugin entrypoints.
"""

from .base import BasePromptStyle, PromptStylePlugin
from .registry import available_styles, build_system_instruction, load_style
from .shared_content import FEEDBACK_MESSAGE

__all__ = [
    "BasePromptStyle",
    "PromptStylePlugin",
    "FEEDBACK_MESSAGE",
    "available_styles",
    "build_system_instruction",
    "load_style",
]
