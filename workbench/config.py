"""Settings for actions, layered as built-in defaults, then the user-wide
~/.workbench/config.json, then the project's own .workbenchconfig.

Both files hold a JSON object. The project file is read from the resolved
project directory only; parent directories are not searched.
"""

import json
from pathlib import Path

WORKBENCHCONFIG = ".workbenchconfig"
GLOBAL_CONFIG_FILE = Path.home() / ".workbench" / "config.json"

PROVIDERS = ("claude", "codex")

DEFAULT_CONFIG = {
    "provider": "claude",
    "learning_mode": True,
    # Optional: "build_command": "gradle --offline", "timeout": 1800
    "build_command": None,
    "output_limit": 200_000,
    "timeout": None,
}


def load_global_config():
    """User-wide settings, or {} when the file is missing or unreadable."""
    try:
        data = json.loads(GLOBAL_CONFIG_FILE.read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def project_config_file(project_path):
    """The project's .workbenchconfig, or None if it has none."""
    config_path = Path(project_path) / WORKBENCHCONFIG
    return config_path if config_path.is_file() else None


def load_config(project_path=None):
    """Effective settings for project_path (cwd when omitted).

    Raises ValueError if the project file is not a JSON object.
    """
    config = dict(DEFAULT_CONFIG)
    config.update(load_global_config())

    config_path = project_config_file(project_path or Path.cwd())
    if config_path is None:
        return config
    try:
        raw = json.loads(config_path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path}: {e}")
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a JSON object")
    config.update(raw)
    return config


def init_config(path=None, provider=None):
    """Write a .workbenchconfig into path (cwd when omitted) and return its path.

    Seeds provider and learning_mode from the user-wide settings.
    """
    target = Path(path) if path else Path.cwd()
    user = load_global_config()
    init = {
        "provider": provider or user.get("provider") or DEFAULT_CONFIG["provider"],
        "learning_mode": user.get("learning_mode", DEFAULT_CONFIG["learning_mode"]),
    }
    target.mkdir(parents=True, exist_ok=True)
    config_path = target / WORKBENCHCONFIG
    config_path.write_text(json.dumps(init, indent=2) + "\n")
    return config_path
