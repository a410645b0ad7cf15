"""Comment templates, AI prompts and naming helpers."""

from .constants import DEFAULT_PROMPTS, DEFAULT_TEMPLATES, SYSTEM_PROMPT
from .templates import TemplateParameter, TemplateRenderer

__all__ = [
    "DEFAULT_PROMPTS",
    "DEFAULT_TEMPLATES",
    "SYSTEM_PROMPT",
    "TemplateParameter",
    "TemplateRenderer",
]
