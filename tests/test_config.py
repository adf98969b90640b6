"""Tests for config layering, credentials and the audit log."""

import json
import os

import pytest

from workbench import config, credentials, log
from workbench.errors import FileOperationError
from workbench.config import DEFAULT_CONFIG, init_config, load_config, project_config_file


def _write_global(data):
    config.GLOBAL_CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    config.GLOBAL_CONFIG_FILE.write_text(json.dumps(data))


class TestLoadConfig:
    """defaults → global → project."""

    def test_defaults(self, project):
        assert load_config(project) == DEFAULT_CONFIG

    def test_global_overrides_defaults(self, project):
        _write_global({"provider": "codex"})
        assert load_config(project)["provider"] == "codex"

    def test_project_overrides_global(self, project):
        _write_global({"provider": "codex", "timeout": 10})
        (project / ".workbenchconfig").write_text(json.dumps({"provider": "claude"}))
        cfg = load_config(project)
        assert cfg["provider"] == "claude"
        assert cfg["timeout"] == 10

    def test_parent_config_not_used(self, project):
        """Only the project directory itself is searched for .workbenchconfig."""
        (project / ".workbenchconfig").write_text(json.dumps({"output_limit": 5}))
        assert project_config_file(project) == project / ".workbenchconfig"
        assert project_config_file(project / "src") is None
        assert load_config(project / "src")["output_limit"] == DEFAULT_CONFIG["output_limit"]

    def test_global_non_object_ignored(self, project):
        _write_global([1, 2])
        assert load_config(project) == DEFAULT_CONFIG

    def test_invalid_json(self, project):
        (project / ".workbenchconfig").write_text("{oops")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(project)

    def test_non_object(self, project):
        (project / ".workbenchconfig").write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(project)

    def test_corrupt_global_ignored(self, project):
        config.GLOBAL_CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        config.GLOBAL_CONFIG_FILE.write_text("nope")
        assert load_config(project) == DEFAULT_CONFIG


class TestInitConfig:

    def test_writes_defaults(self, tmp_path):
        path = init_config(tmp_path / "mod")
        assert json.loads(path.read_text()) == {"provider": "claude", "learning_mode": True}

    def test_provider_argument(self, tmp_path):
        path = init_config(tmp_path, provider="codex")
        assert json.loads(path.read_text())["provider"] == "codex"

    def test_inherits_global(self, tmp_path):
        _write_global({"provider": "codex", "learning_mode": False})
        init = json.loads(init_config(tmp_path).read_text())
        assert init == {"provider": "codex", "learning_mode": False}


class TestCredentials:

    def test_save_and_load(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        credentials.save_credential("OPENAI_API_KEY", "sk-test")
        monkeypatch.delenv("OPENAI_API_KEY")
        assert credentials.load_credentials() == {"OPENAI_API_KEY": "sk-test"}
        assert os.environ["OPENAI_API_KEY"] == "sk-test"

    def test_update_replaces_line(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        credentials.save_credential("ANTHROPIC_API_KEY", "one")
        credentials.save_credential("ANTHROPIC_API_KEY", "two")
        assert credentials.CREDENTIALS_FILE.read_text() == "ANTHROPIC_API_KEY=two\n"
        assert oct(credentials.CREDENTIALS_FILE.stat().st_mode & 0o777) == "0o600"

    def test_keeps_other_keys_and_comments(self):
        credentials.CREDENTIALS_FILE.parent.mkdir(parents=True, exist_ok=True)
        credentials.CREDENTIALS_FILE.write_text("# keys\nOPENAI_API_KEY=sk-old\n")
        credentials.save_credential("ANTHROPIC_API_KEY", "sk-ant")
        credentials.save_credential("OPENAI_API_KEY", "sk-new")
        assert credentials.CREDENTIALS_FILE.read_text() == (
            "# keys\nOPENAI_API_KEY=sk-new\nANTHROPIC_API_KEY=sk-ant\n"
        )

    def test_environment_wins(self, monkeypatch):
        credentials.CREDENTIALS_FILE.parent.mkdir(parents=True, exist_ok=True)
        credentials.CREDENTIALS_FILE.write_text("# keys\nANTHROPIC_API_KEY=from-file\n")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")
        credentials.load_credentials()
        assert os.environ["ANTHROPIC_API_KEY"] == "from-env"

    def test_missing_file(self):
        assert credentials.load_credentials() == {}


class TestAuditLog:

    def test_write_and_read(self, tmp_path):
        log.write_log({"event": "snapshot", "project": str(tmp_path / "a")})
        log.write_log({"event": "build", "project": str(tmp_path / "b")})
        assert [e["event"] for e in log.read_logs()] == ["snapshot", "build"]
        assert [e["event"] for e in log.read_logs(tmp_path / "b")] == ["build"]

    def test_skips_corrupt_lines(self):
        log.LOGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        log.LOGS_FILE.write_text('{"event": "ok"}\nnot json\n\n')
        assert log.read_logs() == [{"event": "ok"}]

    def test_no_file(self):
        assert log.read_logs() == []

    def test_unwritable_log(self, tmp_path, monkeypatch):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        monkeypatch.setattr(log, "LOGS_FILE", blocker / "logs.jsonl")
        with pytest.raises(FileOperationError, match="audit log"):
            log.write_log({"event": "build"})

    def test_entry_not_mutated(self):
        entry = {"event": "build"}
        log.write_log(entry)
        assert entry == {"event": "build"}
        assert "timestamp" in log.read_logs()[0]
