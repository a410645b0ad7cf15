"""Line-oriented parsing of Javadoc-style comment blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

OPENING = "/**"
CLOSING = "*/"
DEFAULT_OPENING = "/**"
DEFAULT_CLOSING = " */"

PARAM_TAG = "param"
RETURN_TAG = "return"
EXCEPTION_TAGS = frozenset({"throws", "exception"})

# "* @param id ..." and "*@param id ..." are the same tag line.
_TAG_LINE = re.compile(r"^\*\s*@(?P<name>[A-Za-z][\w.:-]*)(?P<rest>.*)$")


@dataclass
class ParsedComment:
    """Structured view of a comment: description lines plus tag groups.

    Tag values are the raw source lines of the tag (continuation lines
    included, joined with ``\\n``). Mappings keep first-parse insertion order.
    """

    opening: str = DEFAULT_OPENING
    closing: str = DEFAULT_CLOSING
    description_lines: List[str] = field(default_factory=list)
    param_tags: Dict[str, str] = field(default_factory=dict)
    return_tag: Optional[str] = None
    exception_tags: Dict[str, str] = field(default_factory=dict)
    other_tags: Dict[str, str] = field(default_factory=dict)

    @property
    def description(self) -> str:
        """Description text with comment stars removed, joined by spaces."""
        words = [_strip_star(line) for line in self.description_lines]
        return " ".join(word for word in words if word)


@dataclass
class _PendingTag:
    name: str
    rest: str
    lines: List[str]


def tag_name(line: str) -> Optional[str]:
    """Return the tag name of a raw tag line, or ``None`` for non-tag lines."""
    match = _TAG_LINE.match(line.strip())
    return match.group("name") if match else None


def parse_comment(text: str | None) -> ParsedComment:
    """Split ``text`` into description lines and categorised tag entries.

    Never raises for string input: anything unrecognised lands in the
    description (before the first tag) or is attached to the preceding tag.
    """
    parsed = ParsedComment()
    if not text or not text.strip():
        return parsed

    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    body = _split_delimiters(parsed, lines)

    pending: Optional[_PendingTag] = None
    for line in body:
        match = _TAG_LINE.match(line.strip())
        if match:
            if pending is not None:
                _file_tag(parsed, pending)
            pending = _PendingTag(match.group("name"), match.group("rest"), [line])
        elif pending is not None:
            pending.lines.append(line)
        else:
            parsed.description_lines.append(line)
    if pending is not None:
        _file_tag(parsed, pending)
    return parsed


def _split_delimiters(parsed: ParsedComment, lines: List[str]) -> List[str]:
    start = next(
        (index for index, line in enumerate(lines) if line.strip().startswith(OPENING)),
        None,
    )
    if start is None:
        start_line = None
        body = list(lines)
    else:
        start_line = lines[start]
        body = lines[start + 1 :]

    leading: List[str] = []
    if start_line is not None:
        indent = start_line[: len(start_line) - len(start_line.lstrip())]
        remainder = start_line.strip()[len(OPENING) :]
        if remainder.rstrip().endswith(CLOSING) and not _body_has_closing(body):
            # Single-line comment such as "/** The name. */" or "/** @return the name */".
            remainder = remainder.rstrip()[: -len(CLOSING)]
            parsed.opening = f"{indent}{OPENING}"
            parsed.closing = f"{indent} {CLOSING}"
            return [f"{indent} * {remainder.strip()}"] if remainder.strip() else []
        parsed.opening = f"{indent}{OPENING}"
        if remainder.strip():
            leading.append(f"{indent} * {remainder.strip()}")

    end = None
    for index in range(len(body) - 1, -1, -1):
        if body[index].strip().endswith(CLOSING):
            end = index
            break
    if end is None:
        return leading + body

    closing_line = body[end]
    stripped = closing_line.strip()
    content = stripped[: -len(CLOSING)].rstrip()
    indent = closing_line[: len(closing_line) - len(closing_line.lstrip())]
    trailing: List[str] = []
    if content and content != "*":
        trailing.append(f"{indent}{content}" if content.startswith("*") else f"{indent}* {content}")
        parsed.closing = f"{indent}{CLOSING}"
    else:
        parsed.closing = closing_line
    return leading + body[:end] + trailing


def _body_has_closing(body: List[str]) -> bool:
    return any(line.strip().endswith(CLOSING) for line in body)


def _file_tag(parsed: ParsedComment, pending: _PendingTag) -> None:
    value = "\n".join(pending.lines)
    name = pending.name
    if name == PARAM_TAG:
        key = _first_token(pending.rest)
        if key:
            parsed.param_tags[key] = value
    elif name == RETURN_TAG:
        parsed.return_tag = value
    elif name in EXCEPTION_TAGS:
        key = _first_token(pending.rest)
        if key:
            parsed.exception_tags[key] = value
    elif name not in parsed.other_tags:
        parsed.other_tags[name] = value


def _first_token(rest: str) -> Optional[str]:
    tokens = rest.split()
    return tokens[0] if tokens else None


def _strip_star(line: str) -> str:
    stripped = line.strip()
    if stripped.startswith("*"):
        stripped = stripped[1:]
    return stripped.strip()


__all__ = ["ParsedComment", "parse_comment", "tag_name"]
