# repo_mcp/services/paths.py
import os
from pathlib import Path

from repo_mcp.errors import AccessDenied


class PathResolver:
    """
    Confine client-supplied relative paths to the repository root.

    Normalization is lexical (``.``/``..``/duplicate separators are collapsed
    without touching the filesystem), and containment is checked component by
    component so a sibling such as ``/repo-old`` never passes for ``/repo``.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def resolve(self, rel: str | None) -> Path:
        p = Path(os.path.normpath(os.path.join(self.root, rel or "")))
        if p != self.root and self.root not in p.parents:
            raise AccessDenied("Access denied: Path outside repository")
        return p

    def relative(self, p: Path) -> str:
        """Forward-slash path of ``p`` relative to the root ("." for the root)."""
        return p.relative_to(self.root).as_posix()
