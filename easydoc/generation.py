"""Produces fresh documentation comments for symbols."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import EasyDocConfig
from .llm import LLMRunner, extract_comment_from_response
from .logging import get_logger
from .models import DocumentedSymbol
from .prompting import DEFAULT_PROMPTS, SYSTEM_PROMPT, TemplateRenderer


class GenerationError(RuntimeError):
    """Raised when a comment could not be produced for a symbol."""


class CommentGenerator(ABC):
    """Creates the fresh comment that is merged over an existing one."""

    @abstractmethod
    def generate(self, symbol: DocumentedSymbol, path: Path | None = None) -> str:
        ...


class TemplateCommentGenerator(CommentGenerator):
    def __init__(self, config: EasyDocConfig, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer(config)

    def generate(self, symbol: DocumentedSymbol, path: Path | None = None) -> str:
        rendered = self.renderer.render(symbol, path)
        if not rendered.startswith("/**"):
            raise GenerationError(
                f"Template for {symbol.kind} '{symbol.qualified_name}' did not produce a /** comment"
            )
        return rendered


class AiCommentGenerator(CommentGenerator):
    """Asks the model to fill the rendered template for a symbol."""

    def __init__(
        self,
        config: EasyDocConfig,
        runner: LLMRunner | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.runner = runner or LLMRunner(config.llm)
        self.renderer = renderer or TemplateRenderer(config)
        self._logger = get_logger("generation")

    def build_prompt(
        self,
        symbol: DocumentedSymbol,
        path: Path | None = None,
        *,
        now: Optional[datetime] = None,
    ) -> str:
        template = self.config.prompts.for_kind(symbol.kind) or DEFAULT_PROMPTS.get(symbol.kind)
        if template is None:
            raise GenerationError(f"No prompt configured for symbol kind '{symbol.kind}'")
        context = self.renderer.build_context(symbol, path, now=now)
        replacements = {
            "{template}": self.renderer.template_source(symbol.kind),
            "{context}": self.renderer.describe_context(context),
            "{code}": symbol.text,
        }
        prompt = template
        for placeholder, value in replacements.items():
            prompt = prompt.replace(placeholder, value)
        return prompt

    def generate(self, symbol: DocumentedSymbol, path: Path | None = None) -> str:
        prompt = self.build_prompt(symbol, path)
        self._logger.debug("Requesting AI comment for %s", symbol.qualified_name)
        try:
            response = self.runner.run(prompt, system=SYSTEM_PROMPT)
        except RuntimeError as exc:
            raise GenerationError(f"AI generation failed for '{symbol.qualified_name}': {exc}") from exc
        comment = extract_comment_from_response(response)
        if not comment.strip():
            raise GenerationError(f"AI returned no comment for '{symbol.qualified_name}'")
        if not _is_comment_block(comment):
            raise GenerationError(f"AI returned a malformed comment for '{symbol.qualified_name}'")
        return comment


def _is_comment_block(text: str) -> bool:
    body = text.strip()
    return (
        body.startswith("/**")
        and body.endswith("*/")
        and len(body) >= len("/***/")
        and "*/" not in body[3:-2]
    )


__all__ = [
    "AiCommentGenerator",
    "CommentGenerator",
    "GenerationError",
    "TemplateCommentGenerator",
]
