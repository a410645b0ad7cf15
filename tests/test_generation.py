"""Tests for template and AI comment generators."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from easydoc.config import EasyDocConfig, PromptConfig
from easydoc.generation import AiCommentGenerator, GenerationError, TemplateCommentGenerator
from easydoc.llm.runner import LLMRunner
from easydoc.models import DocumentedSymbol, ParameterInfo
from easydoc.prompting import SYSTEM_PROMPT


def _symbol() -> DocumentedSymbol:
    return DocumentedSymbol(
        kind="method",
        name="add",
        qualified_name="Calc.add",
        language="java",
        start=0,
        indent="    ",
        text="public int add(int a, int b) { return a + b; }",
        parameters=[
            ParameterInfo(name="a", type_name="int", qualified_type_name="int"),
            ParameterInfo(name="b", type_name="int", qualified_type_name="int"),
        ],
        return_type="int",
    )


def _runner(response: str, calls: list) -> LLMRunner:
    def fake(request):
        calls.append(request)
        return response

    return LLMRunner(transport=fake)


@pytest.fixture
def config(tmp_path: Path) -> EasyDocConfig:
    return EasyDocConfig(root=tmp_path, author="alice", version="1.2.3")


def test_template_generator_renders_comment(config: EasyDocConfig) -> None:
    comment = TemplateCommentGenerator(config).generate(_symbol())

    assert comment.startswith("/**\n * Add\n")
    assert " * @param a a" in comment
    assert " * @return int" in comment


def test_template_generator_rejects_non_comment_output(config: EasyDocConfig) -> None:
    config.templates.method_template = "not a comment"

    with pytest.raises(GenerationError):
        TemplateCommentGenerator(config).generate(_symbol())


def test_ai_generator_fills_prompt_placeholders(config: EasyDocConfig) -> None:
    calls: list = []
    generator = AiCommentGenerator(config, runner=_runner("/**\n * Adds.\n */", calls))

    prompt = generator.build_prompt(_symbol(), now=datetime(2024, 5, 6))

    assert "{template}" not in prompt
    assert "{context}" not in prompt
    assert "public int add(int a, int b)" in prompt
    assert "@param {{ param.name }}" in prompt
    assert '"author": "alice"' in prompt


def test_ai_generator_uses_configured_prompt(config: EasyDocConfig) -> None:
    config.prompts = PromptConfig(method_prompt="CODE:{code}")
    calls: list = []
    generator = AiCommentGenerator(config, runner=_runner("```java\n/** Adds. */\n```", calls))

    comment = generator.generate(_symbol())

    assert comment == "/** Adds. */"
    assert calls[0].prompt == "CODE:public int add(int a, int b) { return a + b; }"
    assert calls[0].system == SYSTEM_PROMPT


def test_ai_generator_raises_on_empty_output(config: EasyDocConfig) -> None:
    generator = AiCommentGenerator(config, runner=_runner("   ", []))

    with pytest.raises(GenerationError):
        generator.generate(_symbol())


def test_ai_generator_wraps_transport_errors(config: EasyDocConfig) -> None:
    def failing(request):
        raise RuntimeError("connection refused")

    generator = AiCommentGenerator(
        config, runner=LLMRunner(transport=failing)
    )

    with pytest.raises(GenerationError, match="connection refused"):
        generator.generate(_symbol())


def test_ai_generator_rejects_unterminated_comment(config: EasyDocConfig) -> None:
    generator = AiCommentGenerator(config, runner=_runner("/**\n * Adds numbers.", []))

    with pytest.raises(GenerationError, match="malformed"):
        generator.generate(_symbol())


def test_ai_generator_wraps_markdown_reply(config: EasyDocConfig) -> None:
    generator = AiCommentGenerator(config, runner=_runner("Adds **two** numbers.", []))

    assert generator.generate(_symbol()) == "/**\n * Adds **two** numbers.\n */"
