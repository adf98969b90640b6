"""API keys for the AI CLIs, kept in ~/.workbench/credentials as KEY=VALUE lines."""

import os
from pathlib import Path

from dotenv import dotenv_values, set_key

CREDENTIALS_FILE = Path.home() / ".workbench" / "credentials"


def load_credentials():
    """Export saved keys (ANTHROPIC_API_KEY, OPENAI_API_KEY, ...) to os.environ.

    A variable already set in the environment is left alone. Returns the
    keys read from the file.
    """
    if not CREDENTIALS_FILE.exists():
        return {}

    creds = {k: v for k, v in dotenv_values(CREDENTIALS_FILE).items() if v is not None}
    for key, value in creds.items():
        os.environ.setdefault(key, value)
    return creds


def save_credential(key, value):
    """Store key in the credentials file, replacing any earlier value."""
    CREDENTIALS_FILE.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    CREDENTIALS_FILE.touch(mode=0o600, exist_ok=True)
    set_key(str(CREDENTIALS_FILE), key, value, quote_mode="never")
    CREDENTIALS_FILE.chmod(0o600)
    os.environ[key] = value
