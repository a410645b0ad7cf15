"""Applies comment edits to source text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .models import DocumentedSymbol


@dataclass
class CommentEdit:
    """The comment ``text`` to place on ``symbol``."""

    symbol: DocumentedSymbol
    text: str


def format_comment(text: str, indent: str) -> str:
    """Re-indent a comment so every line after the first sits under ``indent``.

    The first line is returned without indentation; callers place it where the
    declaration's indentation already is.
    """
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines:
        return ""
    formatted = [lines[0]]
    for line in lines[1:]:
        if not line.startswith("*"):
            line = f"* {line}" if line else "*"
        formatted.append(f"{indent} {line}")
    return "\n".join(formatted)


def apply_comments(source: str, edits: Iterable[CommentEdit]) -> str:
    """Return ``source`` with each edit's comment replacing or preceding its symbol."""
    ordered = sorted(edits, key=_edit_position, reverse=True)
    result = source
    for edit in ordered:
        symbol = edit.symbol
        comment = format_comment(edit.text, symbol.indent)
        if not comment:
            continue
        if symbol.comment_span is not None:
            start, end = symbol.comment_span
            result = result[:start] + comment + result[end:]
        else:
            result = result[: symbol.start] + comment + "\n" + symbol.indent + result[symbol.start :]
    return result


def remove_comments(source: str, symbols: Iterable[DocumentedSymbol]) -> str:
    """Delete the Javadoc block of every symbol that has one."""
    documented: List[DocumentedSymbol] = [
        symbol for symbol in symbols if symbol.comment_span is not None
    ]
    documented.sort(key=lambda symbol: symbol.comment_span[0], reverse=True)  # type: ignore[index]
    result = source
    for symbol in documented:
        start, _ = symbol.comment_span  # type: ignore[misc]
        result = result[:start] + result[symbol.start :]
    return result


def _edit_position(edit: CommentEdit) -> int:
    if edit.symbol.comment_span is not None:
        return edit.symbol.comment_span[0]
    return edit.symbol.start


__all__ = ["CommentEdit", "apply_comments", "format_comment", "remove_comments"]
