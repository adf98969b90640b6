"""Pytest configuration and fixtures for workbench tests."""

import os
from pathlib import Path

import pytest

from workbench import config, credentials, lock, log


@pytest.fixture(autouse=True)
def workbench_home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME and every ~/.workbench file at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    state = home / ".workbench"
    monkeypatch.setattr(config, "GLOBAL_CONFIG_FILE", state / "config.json")
    monkeypatch.setattr(credentials, "CREDENTIALS_FILE", state / "credentials")
    monkeypatch.setattr(log, "LOGS_FILE", state / "logs.jsonl")
    monkeypatch.setattr(lock, "LOCKS_DIR", state / "locks")
    # keys saved by credential tests must not leak into os.environ
    for key in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return home


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project tree: a.txt="1" plus a nested source file."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "a.txt").write_text("1")
    src = root / "src" / "main"
    src.mkdir(parents=True)
    (src / "Mod.java").write_text("class Mod {}\n")
    return root


def _read_tree(root: Path, skip: str = ".workbench-snapshots") -> dict:
    tree = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root)
        if rel.parts and rel.parts[0] == skip:
            continue
        if path.is_symlink():
            tree[str(rel)] = ("link", os.readlink(path))
        elif path.is_file():
            tree[str(rel)] = path.read_bytes()
        elif path.is_dir():
            tree[str(rel)] = "dir"
    return tree


@pytest.fixture
def read_tree():
    """Map of relative path -> content for a tree, ignoring the snapshot store."""
    return _read_tree
