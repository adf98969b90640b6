"""Tests for project path resolution."""

import os

import pytest

from workbench.errors import HomeDirectoryError
from workbench.paths import resolve_project_path


class TestResolveProjectPath:
    """~/ expansion and absolute paths."""

    def test_expands_home_prefix(self, workbench_home):
        """~/mods/a resolves under $HOME."""
        assert resolve_project_path("~/mods/a") == workbench_home / "mods" / "a"

    def test_absolute_path_unchanged(self, tmp_path):
        """An absolute path is returned as-is."""
        assert resolve_project_path(str(tmp_path / "p")) == tmp_path / "p"

    def test_relative_path_uses_cwd(self, tmp_path, monkeypatch):
        """A relative path is anchored at the working directory."""
        monkeypatch.chdir(tmp_path)
        assert resolve_project_path("proj") == tmp_path / "proj"

    def test_bare_tilde_name_not_expanded(self, tmp_path, monkeypatch):
        """Only the ~/ form is expanded; ~user style is left alone."""
        monkeypatch.chdir(tmp_path)
        assert resolve_project_path("~other") == tmp_path / "~other"

    def test_missing_home_raises(self, monkeypatch):
        """~/ with no HOME set is an environment error."""
        monkeypatch.delenv("HOME", raising=False)
        with pytest.raises(HomeDirectoryError):
            resolve_project_path("~/x")

    def test_no_existence_check(self, tmp_path):
        """Nonexistent paths resolve without error."""
        path = resolve_project_path(str(tmp_path / "nope" / "deeper"))
        assert not path.exists()
        assert os.path.isabs(path)
