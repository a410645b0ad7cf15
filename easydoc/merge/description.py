"""Choose between hand-written and generated description text."""

from __future__ import annotations

from typing import List

from .parser import ParsedComment


def choose_description(old: ParsedComment, new: ParsedComment) -> List[str]:
    """Return the old description lines when they hold any text, else the new ones."""
    if old.description.strip():
        return list(old.description_lines)
    return list(new.description_lines)


__all__ = ["choose_description"]
