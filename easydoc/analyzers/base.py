"""Base classes for language analyzers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Tuple

from ..models import DocumentedSymbol


class SourceAnalyzer(ABC):
    """Locates documentable symbols, their comments and signatures in source text."""

    language: str = ""
    suffixes: Tuple[str, ...] = ()

    def supports(self, path: Path) -> bool:
        """Return True when this analyzer understands files like ``path``."""
        return path.suffix.lower() in self.suffixes

    @abstractmethod
    def analyze(self, source: str) -> List[DocumentedSymbol]:
        """Return symbols in source order, computed from ``source`` as it is now."""
