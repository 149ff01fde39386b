"""Tests for gitgrade.repo_scanner."""

from __future__ import annotations

import os
import socket
from pathlib import Path

import pytest

from gitgrade.repo_scanner import RepoScanner, walk


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_walk_yields_every_regular_file_recursively(tmp_path: Path) -> None:
    _write(tmp_path / "app.py", "print('hi')\n")
    _write(tmp_path / "src" / "lib" / "util.js", "export {}\n")
    _write(tmp_path / ".git" / "config", "[core]\n")
    _write(tmp_path / "Makefile", "all:\n")

    entries = {entry.path.relative_to(tmp_path).as_posix(): entry for entry in walk(tmp_path)}

    assert set(entries) == {"app.py", "src/lib/util.js", ".git/config", "Makefile"}
    assert entries["app.py"].extension == ".py"
    assert entries["src/lib/util.js"].extension == ".js"
    assert entries["Makefile"].extension == ""
    assert entries["src/lib/util.js"].name == "util.js"
    assert all(entry.is_regular for entry in entries.values())


def test_walk_keeps_extension_case_and_treats_dotfiles_as_extensionless(tmp_path: Path) -> None:
    _write(tmp_path / "Main.JAVA", "class Main {}\n")
    _write(tmp_path / ".env", "SECRET=1\n")

    extensions = {entry.name: entry.extension for entry in walk(tmp_path)}

    assert extensions == {"Main.JAVA": ".JAVA", ".env": ""}


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_walk_skips_symlinks(tmp_path: Path) -> None:
    _write(tmp_path / "real.py", "x = 1\n")
    outside = tmp_path.parent / f"{tmp_path.name}_outside"
    _write(outside / "hidden.py", "y = 2\n")
    os.symlink(tmp_path / "real.py", tmp_path / "alias.py")
    os.symlink(outside, tmp_path / "linked_dir")

    names = sorted(entry.name for entry in walk(tmp_path))

    assert names == ["real.py"]


@pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="unix sockets unsupported")
def test_walk_skips_sockets(tmp_path: Path) -> None:
    _write(tmp_path / "real.py", "x = 1\n")
    sock_path = tmp_path / "s.sock"
    if len(str(sock_path)) > 100:
        pytest.skip("socket path too long for AF_UNIX")
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        server.bind(str(sock_path))
        names = sorted(entry.name for entry in walk(tmp_path))
    finally:
        server.close()

    assert names == ["real.py"]


def test_walk_rejects_missing_root_eagerly(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError) as excinfo:
        walk(missing)
    assert str(missing) in str(excinfo.value)


def test_walk_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    _write(target, "data\n")
    with pytest.raises(NotADirectoryError):
        walk(target)


def test_walk_errors_are_ioerrors(tmp_path: Path) -> None:
    with pytest.raises(IOError):
        walk(tmp_path / "nope")


def test_walk_is_lazy(tmp_path: Path) -> None:
    _write(tmp_path / "a.py", "a = 1\n")
    iterator = walk(tmp_path)
    assert iter(iterator) is iterator
    assert next(iterator).name == "a.py"


def test_walk_honours_excluded_directories(tmp_path: Path) -> None:
    _write(tmp_path / "src" / "app.py", "x = 1\n")
    _write(tmp_path / "node_modules" / "dep" / "index.js", "module.exports = {}\n")

    names = [entry.name for entry in walk(tmp_path, exclude_dirs=["node_modules"])]

    assert names == ["app.py"]


def test_scanner_snapshot_resolves_root(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    _write(repo / "a.py", "a = 1\n")
    _write(repo / "docs" / "guide.md", "# Guide\n")

    snapshot = RepoScanner().scan(str(repo))

    assert snapshot.root == repo.resolve()
    assert sorted(entry.name for entry in snapshot.entries) == ["a.py", "guide.md"]


def test_empty_directory_yields_nothing(tmp_path: Path) -> None:
    assert list(walk(tmp_path)) == []
