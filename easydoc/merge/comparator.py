"""Entry points for reconciling an existing comment with a freshly generated one."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Protocol

from ..logging import get_logger
from ..models import Signature, to_snapshot
from .assembler import assemble_comment
from .description import choose_description
from .parser import parse_comment
from .reconciler import reconcile


class CommentHost(Protocol):
    """What the language-analysis side exposes for a documented symbol."""

    def existing_comment(self) -> Optional[str]:
        ...

    def current_signature(self) -> Optional[Signature]:
        ...


@dataclass(frozen=True)
class StaticCommentHost:
    """A host built from plain values, for merges outside a source file."""

    comment: Optional[str]
    signature: Optional[Signature] = None

    def existing_comment(self) -> Optional[str]:
        return self.comment

    def current_signature(self) -> Optional[Signature]:
        return self.signature


class DocCommentComparator(ABC):
    """Per-language strategy deciding how a fresh comment replaces an old one."""

    language: str = ""

    @abstractmethod
    def has_comment(self, symbol: CommentHost) -> bool:
        """Return True when ``symbol`` currently carries a documentation comment."""

    @abstractmethod
    def merge_comments(self, symbol: CommentHost, new_text: str) -> str:
        """Return the comment text to write for ``symbol``."""


def merge_texts(old_text: str, new_text: str, signature: Signature | None) -> str:
    """Reconcile two comment texts against ``signature`` without a host symbol.

    Errors propagate; :meth:`JavaDocCommentComparator.merge_comments` is the
    variant that falls back to ``new_text``.
    """
    snapshot = to_snapshot(signature)
    old = parse_comment(old_text)
    new = parse_comment(new_text)
    description = choose_description(old, new)
    tags = reconcile(old, new, snapshot)
    return assemble_comment(description, tags, opening=new.opening, closing=new.closing)


class JavaDocCommentComparator(DocCommentComparator):
    """Javadoc reconciliation: keep human text, track the signature for tags."""

    language = "java"

    def __init__(self) -> None:
        self.logger = get_logger("merge")

    def has_comment(self, symbol: CommentHost) -> bool:
        existing = symbol.existing_comment()
        return existing is not None and bool(existing.strip())

    def merge_comments(self, symbol: CommentHost, new_text: str) -> str:
        if not self.has_comment(symbol):
            return new_text
        old_text = symbol.existing_comment() or ""
        try:
            # The signature is read now, not when new_text was generated.
            return merge_texts(old_text, new_text, symbol.current_signature())
        except Exception as exc:
            self.logger.debug("Comment merge failed, using generated text: %s", exc)
            return new_text


_BUILTIN_COMPARATORS: Dict[str, Callable[[], DocCommentComparator]] = {
    "java": JavaDocCommentComparator,
}


def build_comparator_registry(
    overrides: Mapping[str, DocCommentComparator] | None = None,
) -> Dict[str, DocCommentComparator]:
    """Instantiate one comparator per supported language, keyed by language id."""
    registry = {language: factory() for language, factory in _BUILTIN_COMPARATORS.items()}
    if overrides:
        registry.update({language.lower(): comparator for language, comparator in overrides.items()})
    return registry


__all__ = [
    "CommentHost",
    "DocCommentComparator",
    "JavaDocCommentComparator",
    "StaticCommentHost",
    "build_comparator_registry",
    "merge_texts",
]
