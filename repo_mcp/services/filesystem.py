# repo_mcp/services/filesystem.py
from __future__ import annotations

import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal

from pydantic import BaseModel

from repo_mcp.errors import AccessDenied, NotFound
from repo_mcp.services.paths import PathResolver


class DirectoryEntry(BaseModel):
    name: str
    type: Literal["file", "directory"]
    path: str


class FileInfo(BaseModel):
    path: str
    type: Literal["file", "directory"]
    size: int
    created: datetime
    modified: datetime
    permissions: str


def _utc(ts: float) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)


class FileSystemService:
    """
    Read/write/list/mkdir/delete/stat, all confined to the repository root.

    OSErrors from the underlying calls propagate unchanged; the tool
    boundary reports them to the client.
    """

    def __init__(self, resolver: PathResolver):
        self.resolver = resolver

    def read_text(self, rel_path: str) -> str:
        p = self.resolver.resolve(rel_path)
        if not p.exists():
            raise NotFound(f"File not found: {rel_path}")
        # Best effort on binary content
        return p.read_bytes().decode("utf-8", errors="replace")

    def write_text(self, rel_path: str, content: str) -> str:
        p = self.resolver.resolve(rel_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content.encode("utf-8"))
        return f"Successfully wrote to {rel_path}"

    def list_directory(self, rel_path: str | None = None) -> List[DirectoryEntry]:
        # Entries come back in OS enumeration order, which differs across platforms.
        p = self.resolver.resolve(rel_path)
        if not p.exists():
            raise NotFound(f"Directory not found: {rel_path or ''}")
        with os.scandir(p) as it:
            return [
                DirectoryEntry(
                    name=entry.name,
                    type="directory" if entry.is_dir(follow_symlinks=False) else "file",
                    path=self.resolver.relative(p / entry.name),
                )
                for entry in it
            ]

    def create_directory(self, rel_path: str) -> str:
        p = self.resolver.resolve(rel_path)
        p.mkdir(parents=True, exist_ok=True)
        return f"Successfully created directory: {rel_path}"

    def delete(self, rel_path: str) -> str:
        p = self.resolver.resolve(rel_path)
        if p == self.resolver.root:
            raise AccessDenied("Access denied: Cannot delete repository root")
        if not p.exists():
            raise NotFound(f"File not found: {rel_path}")
        if p.is_dir() and not p.is_symlink():
            shutil.rmtree(p)
        else:
            p.unlink()
        return f"Successfully deleted: {rel_path}"

    def get_info(self, rel_path: str) -> FileInfo:
        p = self.resolver.resolve(rel_path)
        if not p.exists():
            raise NotFound(f"Path not found: {rel_path}")
        st = p.stat()
        # st_birthtime only exists on some platforms
        created = getattr(st, "st_birthtime", st.st_ctime)
        return FileInfo(
            path=self.resolver.relative(p),
            type="directory" if p.is_dir() else "file",
            size=st.st_size,
            created=_utc(created),
            modified=_utc(st.st_mtime),
            permissions=f"{st.st_mode & 0o777:03o}",
        )
