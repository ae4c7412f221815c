# repo_mcp/services/search.py
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel

from repo_mcp.services.paths import PathResolver

# Never descended into during search
PRUNED_DIRS = frozenset({"node_modules", ".git", "dist", "build", ".next"})

DEFAULT_MAX_RESULTS = 20


class SearchResult(BaseModel):
    file: str
    line: int
    content: str


def compile_file_pattern(pattern: str) -> Callable[[str], bool]:
    """
    Turn a ``*``-wildcard pattern into a file-name predicate.

    Only ``*`` is special. The match is anchored at the end of the name but
    not at the start, so ``*.py`` and ``.py`` both act as extension filters.
    """
    regex = re.compile(".*".join(re.escape(part) for part in pattern.split("*")) + r"\Z")
    return lambda name: regex.search(name) is not None


class TextSearchService:
    """
    Case-insensitive substring search over the repository, depth first.

    Results follow directory enumeration order, then line order. The walk
    stops as soon as ``max_results`` hits have been collected.
    """

    def __init__(self, resolver: PathResolver):
        self.resolver = resolver

    def search(
        self,
        query: str,
        file_pattern: Optional[str] = None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> List[SearchResult]:
        matches_name = compile_file_pattern(file_pattern) if file_pattern else None
        results: List[SearchResult] = []
        self._walk(self.resolver.root, query.lower(), matches_name, max_results, results)
        return results

    def _walk(
        self,
        directory: Path,
        needle: str,
        matches_name: Optional[Callable[[str], bool]],
        limit: int,
        results: List[SearchResult],
    ) -> None:
        if len(results) >= limit:
            return
        with os.scandir(directory) as it:
            entries = list(it)
        for entry in entries:
            if len(results) >= limit:
                return
            if entry.is_dir(follow_symlinks=False):
                if entry.name not in PRUNED_DIRS:
                    self._walk(Path(entry.path), needle, matches_name, limit, results)
            elif entry.is_file(follow_symlinks=False):
                if matches_name and not matches_name(entry.name):
                    continue
                self._scan_file(Path(entry.path), needle, limit, results)

    def _scan_file(self, path: Path, needle: str, limit: int, results: List[SearchResult]) -> None:
        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError):
            # Unreadable or not text
            return
        rel = self.resolver.relative(path)
        for lineno, line in enumerate(content.split("\n"), start=1):
            if len(results) >= limit:
                return
            if needle in line.lower():
                results.append(SearchResult(file=rel, line=lineno, content=line.strip()))
