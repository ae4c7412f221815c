# tests/test_paths.py
from pathlib import Path
import pytest

from repo_mcp.errors import AccessDenied
from repo_mcp.services.paths import PathResolver


@pytest.mark.parametrize("rel", ["../escape.txt", "a/../../escape.txt", "..", "./../x", "/etc/passwd"])
def test_escapes_are_denied(tmp_path: Path, rel: str):
    resolver = PathResolver(tmp_path)
    with pytest.raises(AccessDenied):
        resolver.resolve(rel)


@pytest.mark.parametrize("rel", ["", ".", "a", "a/b/../c", "./a//b", "a/.."])
def test_descendants_and_root_resolve(tmp_path: Path, rel: str):
    resolver = PathResolver(tmp_path)
    p = resolver.resolve(rel)
    assert p.is_absolute()
    assert p == resolver.root or resolver.root in p.parents


def test_empty_path_is_root(tmp_path: Path):
    resolver = PathResolver(tmp_path)
    assert resolver.resolve("") == tmp_path.resolve()
    assert resolver.resolve(None) == tmp_path.resolve()


def test_sibling_with_root_as_string_prefix_is_denied(tmp_path: Path):
    root = tmp_path / "b"
    (tmp_path / "bb").mkdir()
    resolver = PathResolver(root)
    with pytest.raises(AccessDenied):
        resolver.resolve("../bb/secret.txt")


def test_absolute_path_inside_root_is_allowed(tmp_path: Path):
    resolver = PathResolver(tmp_path)
    inside = tmp_path.resolve() / "x.txt"
    assert resolver.resolve(str(inside)) == inside


def test_relative_uses_forward_slashes(tmp_path: Path):
    resolver = PathResolver(tmp_path)
    assert resolver.relative(resolver.resolve("a/b/c.txt")) == "a/b/c.txt"
    assert resolver.relative(resolver.root) == "."


def test_symlinks_are_not_resolved(tmp_path: Path):
    outside = tmp_path / "outside"
    outside.mkdir()
    root = tmp_path / "root"
    root.mkdir()
    (root / "link").symlink_to(outside, target_is_directory=True)
    resolver = PathResolver(root)
    assert resolver.resolve("link/file.txt") == root.resolve() / "link" / "file.txt"
