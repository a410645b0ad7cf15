"""Model runners and response cleanup."""

from .extraction import extract_comment_from_response
from .runner import LLMRequest, LLMRunner

__all__ = ["LLMRequest", "LLMRunner", "extract_comment_from_response"]
