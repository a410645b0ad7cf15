"""Pipeline orchestration for generate/remove flows."""

from __future__ import annotations

import difflib
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .analyzers import SourceAnalyzer, analyzer_for_path, default_analyzers
from .config import CONFIG_FILENAME, EasyDocConfig, load_config
from .generation import AiCommentGenerator, CommentGenerator, GenerationError, TemplateCommentGenerator
from .llm.runner import LLMRunner
from .logging import get_logger
from .merge import DocCommentComparator, build_comparator_registry
from .models import DocumentedSymbol
from .stores import TagRegistry
from .writer import CommentEdit, apply_comments, remove_comments

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".gradle",
    ".easydoc",
    "build",
    "out",
    "target",
    "node_modules",
}

SymbolKey = Tuple[str, str, int]


@dataclass
class GenerateOutcome:
    """Result of a generate or remove run for one file."""

    path: Path
    diff: str
    symbols_written: int
    dry_run: bool


class Orchestrator:
    """Coordinates analysis, generation, reconciliation and writing per file."""

    def __init__(
        self,
        analyzers: Optional[Mapping[str, SourceAnalyzer]] = None,
        comparators: Optional[Mapping[str, DocCommentComparator]] = None,
        llm_runner: LLMRunner | None = None,
        *,
        max_workers: int = 4,
    ) -> None:
        self.analyzers: Dict[str, SourceAnalyzer] = (
            dict(analyzers) if analyzers is not None else default_analyzers()
        )
        self.comparators: Dict[str, DocCommentComparator] = (
            dict(comparators) if comparators is not None else build_comparator_registry()
        )
        self.max_workers = max(1, max_workers)
        self.logger = get_logger("orchestrator")
        self._llm_runner = llm_runner
        self._locks: Dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def run_generate(
        self,
        path: str | Path,
        *,
        use_ai: bool = False,
        overwrite: bool = True,
        symbol: str | None = None,
        dry_run: bool = False,
    ) -> List[GenerateOutcome]:
        """Generate (or refresh) documentation comments for every source file under ``path``."""
        target = self._resolve_target(path)
        config = self._load_config(target)
        generator = self._build_generator(config, use_ai)
        registry = TagRegistry.for_root(config.root)
        mode = "AI" if use_ai else "template"
        self.logger.info("Generating %s comments under %s", mode, target)

        outcomes: List[GenerateOutcome] = []
        for file_path in self._iter_source_files(target, config):
            outcome = self._generate_file(
                file_path,
                generator,
                registry,
                concurrent=use_ai,
                overwrite=overwrite,
                symbol=symbol,
                dry_run=dry_run,
            )
            if outcome is not None:
                outcomes.append(outcome)
        if not dry_run:
            registry.persist()
        self.logger.info("Updated %d file(s)", len(outcomes))
        return outcomes

    def run_remove(
        self,
        path: str | Path,
        *,
        symbol: str | None = None,
        dry_run: bool = False,
    ) -> List[GenerateOutcome]:
        """Remove documentation comments from every source file under ``path``."""
        target = self._resolve_target(path)
        config = self._load_config(target)
        self.logger.info("Removing comments under %s", target)
        outcomes: List[GenerateOutcome] = []
        for file_path in self._iter_source_files(target, config):
            analyzer = analyzer_for_path(self.analyzers, file_path)
            if analyzer is None:
                continue
            with self._lock_for(file_path):
                original = file_path.read_text(encoding="utf-8")
                symbols = [
                    item
                    for item in _select(analyzer.analyze(original), symbol)
                    if item.comment_span is not None
                ]
                if not symbols:
                    continue
                updated = remove_comments(original, symbols)
                if updated == original:
                    continue
                if not dry_run:
                    file_path.write_text(updated, encoding="utf-8")
            outcomes.append(
                GenerateOutcome(
                    path=file_path,
                    diff=self._render_diff(file_path, original, updated),
                    symbols_written=len(symbols),
                    dry_run=dry_run,
                )
            )
        return outcomes

    # ------------------------------------------------------------------
    # Per-file pipeline

    def _generate_file(
        self,
        file_path: Path,
        generator: CommentGenerator,
        registry: TagRegistry,
        *,
        concurrent: bool,
        overwrite: bool,
        symbol: str | None,
        dry_run: bool,
    ) -> GenerateOutcome | None:
        analyzer = analyzer_for_path(self.analyzers, file_path)
        if analyzer is None:
            return None
        comparator = self.comparators.get(analyzer.language)
        if comparator is None:
            self.logger.warning("No comment comparator for language '%s'; skipping %s", analyzer.language, file_path)
            return None

        source = file_path.read_text(encoding="utf-8")
        candidates = list(_keyed(_select(analyzer.analyze(source), symbol)))
        if not overwrite:
            candidates = [(key, item) for key, item in candidates if not comparator.has_comment(item)]
        if not candidates:
            return None

        fresh = self._generate_fresh(generator, file_path, candidates, concurrent=concurrent)
        if not fresh:
            return None

        with self._lock_for(file_path):
            original = file_path.read_text(encoding="utf-8")
            edits: List[CommentEdit] = []
            for key, current in _keyed(_select(analyzer.analyze(original), symbol)):
                generated = fresh.get(key)
                if generated is None:
                    continue
                if comparator.has_comment(current):
                    if not overwrite:
                        continue
                    text = comparator.merge_comments(current, generated)
                else:
                    text = generated
                edits.append(CommentEdit(symbol=current, text=text))
            if not edits:
                return None
            updated = apply_comments(original, edits)
            if updated == original:
                return None
            if not dry_run:
                file_path.write_text(updated, encoding="utf-8")
                for edit in edits:
                    added = registry.register_comment(edit.text)
                    if added:
                        self.logger.debug("Registered custom tags: %s", ", ".join(added))

        return GenerateOutcome(
            path=file_path,
            diff=self._render_diff(file_path, original, updated),
            symbols_written=len(edits),
            dry_run=dry_run,
        )

    def _generate_fresh(
        self,
        generator: CommentGenerator,
        file_path: Path,
        keyed: Sequence[Tuple[SymbolKey, DocumentedSymbol]],
        *,
        concurrent: bool,
    ) -> Dict[SymbolKey, str]:

        def _one(item: Tuple[SymbolKey, DocumentedSymbol]) -> Tuple[SymbolKey, Optional[str]]:
            key, target = item
            try:
                return key, generator.generate(target, file_path)
            except GenerationError as exc:
                self.logger.warning("Skipping %s: %s", target.qualified_name, exc)
                return key, None

        if concurrent and len(keyed) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(_one, keyed))
        else:
            results = [_one(item) for item in keyed]
        return {key: text for key, text in results if text}

    # ------------------------------------------------------------------
    # Helpers

    def _build_generator(self, config: EasyDocConfig, use_ai: bool) -> CommentGenerator:
        if use_ai:
            runner = self._llm_runner or LLMRunner(config.llm)
            return AiCommentGenerator(config, runner=runner)
        return TemplateCommentGenerator(config)

    def _lock_for(self, path: Path) -> threading.Lock:
        key = path.resolve()
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @staticmethod
    def _resolve_target(path: str | Path) -> Path:
        target = Path(path).expanduser().resolve()
        if not target.exists():
            raise FileNotFoundError(f"{target} does not exist")
        return target

    @staticmethod
    def _load_config(target: Path) -> EasyDocConfig:
        start = target if target.is_dir() else target.parent
        for directory in [start, *start.parents]:
            if (directory / CONFIG_FILENAME).is_file():
                return load_config(directory)
        return load_config(start)

    def _iter_source_files(self, target: Path, config: EasyDocConfig) -> Iterator[Path]:
        if target.is_file():
            yield target
            return
        patterns = [pattern.replace("\\", "/") for pattern in config.exclude_paths]
        for dirpath, dirnames, filenames in os.walk(target):
            current = Path(dirpath)
            dirnames[:] = sorted(
                name
                for name in dirnames
                if name not in _EXCLUDED_DIRS
                and not _is_excluded(_relative(current / name, config.root), patterns)
            )
            for filename in sorted(filenames):
                candidate = current / filename
                if analyzer_for_path(self.analyzers, candidate) is None:
                    continue
                if _is_excluded(_relative(candidate, config.root), patterns):
                    continue
                yield candidate

    @staticmethod
    def _render_diff(path: Path, original: str, updated: str) -> str:
        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{path.name} (original)",
            tofile=f"{path.name} (updated)",
        )
        return "".join(diff)


def _select(symbols: Sequence[DocumentedSymbol], name: str | None) -> List[DocumentedSymbol]:
    if not name:
        return list(symbols)
    return [item for item in symbols if name in (item.name, item.qualified_name)]


def _keyed(symbols: Sequence[DocumentedSymbol]) -> Iterator[Tuple[SymbolKey, DocumentedSymbol]]:
    """Pair symbols with a key that survives re-analysis (overloads get an ordinal)."""
    seen: Dict[Tuple[str, str], int] = {}
    for item in symbols:
        base = (item.kind, item.qualified_name)
        ordinal = seen.get(base, 0)
        seen[base] = ordinal + 1
        yield (item.kind, item.qualified_name, ordinal), item


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _is_excluded(rel_path: str, patterns: Sequence[str]) -> bool:
    for pattern in patterns:
        stripped = pattern.rstrip("/")
        if fnmatchcase(rel_path, stripped) or rel_path.startswith(f"{stripped}/"):
            return True
        if pattern.startswith("**/") and fnmatchcase(rel_path, pattern[3:]):
            return True
    return False


__all__ = ["GenerateOutcome", "Orchestrator"]
