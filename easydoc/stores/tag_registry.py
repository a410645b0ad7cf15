"""Persistent registry of non-standard Javadoc tags seen in written comments."""

from __future__ import annotations

from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Dict, Iterable, List

from ..merge.parser import tag_name

_REGISTRY_VERSION = 1
REGISTRY_PATH = Path(".easydoc") / "custom_tags.json"

STANDARD_TAGS = frozenset(
    {
        "author",
        "version",
        "since",
        "see",
        "deprecated",
        "param",
        "return",
        "throws",
        "exception",
        "serial",
        "serialfield",
        "serialdata",
        "link",
        "linkplain",
        "value",
        "code",
        "literal",
        "docroot",
        "inheritdoc",
    }
)


class TagRegistry:
    """Remembers custom tag names (``@date``, ``@email``) with first-seen timestamps."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._tags: Dict[str, str] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    @classmethod
    def for_root(cls, root: Path) -> "TagRegistry":
        return cls(root / REGISTRY_PATH)

    @property
    def tags(self) -> List[str]:
        return sorted(self._tags)

    def register(self, names: Iterable[str]) -> List[str]:
        """Record unknown tag names; returns the ones that were new."""
        added: List[str] = []
        for name in names:
            key = name.strip().lower()
            if not key or key in STANDARD_TAGS or key in self._tags:
                continue
            self._tags[key] = datetime.now(UTC).isoformat().replace("+00:00", "Z")
            added.append(key)
        if added:
            self._dirty = True
        return added

    def register_comment(self, comment: str) -> List[str]:
        names = []
        for line in comment.splitlines():
            name = tag_name(line.strip())
            if name:
                names.append(name)
        return self.register(names)

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {"version": _REGISTRY_VERSION, "tags": self._tags}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        self._dirty = False

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _REGISTRY_VERSION:
            return
        tags = data.get("tags")
        if not isinstance(tags, dict):
            return
        self._tags = {
            str(key).lower(): str(value)
            for key, value in tags.items()
            if isinstance(key, str) and key.lower() not in STANDARD_TAGS
        }
        self._dirty = False


__all__ = ["REGISTRY_PATH", "STANDARD_TAGS", "TagRegistry"]
