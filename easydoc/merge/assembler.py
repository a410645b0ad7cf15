"""Rebuild comment text from a description and merged tag groups."""

from __future__ import annotations

import re
from typing import List, Sequence

from .parser import DEFAULT_CLOSING, DEFAULT_OPENING
from .reconciler import MergedTags

# Some generators emit "@param<T>"; Javadoc tooling expects "@param <T>".
_GLUED_GENERIC_PARAM = re.compile(r"^(\s*\*\s*@param)<")


def normalise_generic_param(line: str) -> str:
    return _GLUED_GENERIC_PARAM.sub(r"\1 <", line)


def assemble_comment(
    description: Sequence[str],
    tags: MergedTags,
    *,
    opening: str = DEFAULT_OPENING,
    closing: str = DEFAULT_CLOSING,
) -> str:
    """Emit opening, description, params, return, exceptions, other tags, closing."""
    lines: List[str] = [opening]
    lines.extend(description)
    tag_lines: List[str] = list(tags.params)
    if tags.return_tag is not None:
        tag_lines.append(tags.return_tag)
    tag_lines.extend(tags.exceptions)
    tag_lines.extend(tags.other)
    for entry in tag_lines:
        lines.extend(normalise_generic_param(line) for line in entry.split("\n"))
    lines.append(closing)
    return "\n".join(lines)


__all__ = ["assemble_comment", "normalise_generic_param"]
