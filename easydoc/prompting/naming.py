"""Identifier to prose conversions used when seeding comment descriptions."""

from __future__ import annotations

import re
from typing import List

_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z]|\d|\b|_)|[A-Z]?[a-z]+\d*|[A-Z]+\d*|\d+")
_KEPT_PREFIXES = "XML"


def split_words(name: str) -> List[str]:
    """``parseHTTPResponse`` -> ``["parse", "HTTP", "Response"]``."""
    if not name:
        return []
    words: List[str] = []
    for chunk in re.split(r"[_\s]+", name):
        words.extend(_WORD.findall(chunk))
    return words


def split_name(name: str) -> str:
    """Lower-cased words joined with spaces; generic markers such as ``<T>`` are kept."""
    if name.startswith("<") and name.endswith(">"):
        return name
    return " ".join(word.lower() for word in split_words(name))


def first_upper_converter(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in split_words(name))


def first_lower_converter(name: str) -> str:
    return " ".join(word[:1].lower() + word[1:] for word in split_words(name))


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:] if name else name


def convert_class_name(name: str | None) -> str:
    """Split a class name into words, dropping a single-letter prefix.

    ``IPage`` -> ``page``, ``QueryDTO`` -> ``query dto``. Prefixes listed in
    ``_KEPT_PREFIXES`` (``XMLParser``) are left alone.
    """
    if not name:
        return ""
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        if name[0] not in _KEPT_PREFIXES:
            name = name[1:]
    return " ".join(word.lower() for word in split_words(name))


__all__ = [
    "convert_class_name",
    "first_lower_converter",
    "first_upper_converter",
    "lower_first",
    "split_name",
    "split_words",
]
