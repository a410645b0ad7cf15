"""Language analyzers keyed by language id."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping, Optional

from .base import SourceAnalyzer
from .java import JavaSourceAnalyzer


def default_analyzers() -> Dict[str, SourceAnalyzer]:
    """Analyzers for every language that has a comment comparator."""
    return {"java": JavaSourceAnalyzer()}


def analyzer_for_path(
    analyzers: Mapping[str, SourceAnalyzer], path: Path
) -> Optional[SourceAnalyzer]:
    for analyzer in analyzers.values():
        if analyzer.supports(path):
            return analyzer
    return None


__all__ = [
    "JavaSourceAnalyzer",
    "SourceAnalyzer",
    "analyzer_for_path",
    "default_analyzers",
]
