"""
Tests for the prompt style registry.
"""

from __future__ import annotations

import pytest

from mock_interview.models import PromptStyle
from mock_interview.styles import available_styles, build_system_instruction, load_style


def test_available_styles_covers_every_enum_member() -> None:
    assert set(available_styles()) == {s.value for s in PromptStyle}


def test_load_unknown_style_fails_fast() -> None:
    with pytest.raises(ValueError, match="Unknown style"):
        load_style("does-not-exist")


def test_load_empty_style_fails() -> None:
    with pytest.raises(ValueError, match="empty"):
        load_style("  ")


def test_load_style_is_case_insensitive() -> None:
    assert load_style("behavioral") is load_style(PromptStyle.BEHAVIORAL)


def test_instruction_mentions_role_and_topic() -> None:
    instruction = build_system_instruction(PromptStyle.TECHNICAL, "Data Engineer", "Spark")

    assert "Data Engineer" in instruction
    assert "Spark" in instruction
    assert "{role}" not in instruction


def test_blank_role_and_topic_use_defaults() -> None:
    instruction = build_system_instruction(PromptStyle.BEHAVIORAL, " ", "")

    assert "the role" in instruction
    assert "general topics" in instruction


def test_styles_resolve_to_their_shipped_templates() -> None:
    """TECHNICAL uses the compact brief, BEHAVIORAL the long-form persona."""
    technical = build_system_instruction(PromptStyle.TECHNICAL, "SWE", "APIs")
    behavioral = build_system_instruction(PromptStyle.BEHAVIORAL, "SWE", "APIs")

    assert "Sanvi" in behavioral
    assert "Sanvi" not in technical
    assert technical != behavioral


def test_instruction_is_deterministic() -> None:
    first = build_system_instruction(PromptStyle.TECHNICAL, "SWE", "APIs")
    second = build_system_instruction(PromptStyle.TECHNICAL, "SWE", "APIs")

    assert first == second
