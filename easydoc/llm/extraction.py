"""Cleans model output down to a single Javadoc comment."""

from __future__ import annotations

import json
import re

from .runner import extract_content

_ESCAPES = (
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ('\\"', '"'),
    ("\\'", "'"),
)
_UNICODE_ESCAPE = re.compile(r"\\u([0-9a-fA-F]{4})")
_FENCE = re.compile(r"```[A-Za-z]*\s*\n?(.*?)```", re.DOTALL)


def extract_comment_from_response(response: str) -> str:
    """Return the ``/** ... */`` block found in ``response``.

    JSON chat payloads are unwrapped, escape sequences decoded and code fences
    removed first. Text with no comment markers is wrapped in a new comment.
    Returns an empty string for empty input.
    """
    content = (response or "").strip()
    if not content:
        return ""
    if content.startswith("{"):
        content = _unwrap_json(content)
    content = _unescape(content)

    fenced = _FENCE.search(content)
    if fenced:
        content = fenced.group(1).strip()

    start = content.find("/**")
    if start >= 0:
        end = content.find("*/", start + 3)
        if end > start:
            return content[start : end + 2]
        return content[start:].rstrip()
    lines = [_strip_star(line) for line in content.strip().splitlines()]
    if not any(lines):
        return ""
    body = "\n".join(f" * {line}".rstrip() for line in lines)
    return f"/**\n{body}\n */"


def _unwrap_json(content: str) -> str:
    try:
        payload = json.loads(content)
    except json.JSONDecodeError:
        return content
    extracted = extract_content(payload)
    return extracted or content


def _strip_star(line: str) -> str:
    stripped = line.strip()
    if stripped.startswith("*") and not stripped.startswith("**"):
        stripped = stripped[1:].strip()
    return stripped


def _unescape(content: str) -> str:
    for escaped, plain in _ESCAPES:
        content = content.replace(escaped, plain)
    content = _UNICODE_ESCAPE.sub(lambda match: chr(int(match.group(1), 16)), content)
    return content.replace("\\\\", "\\")


__all__ = ["extract_comment_from_response"]
