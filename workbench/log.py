"""Audit trail of dispatched actions, one JSON object per line.

Entries carry the action name as "event", the resolved project path, the
snapshot name for snapshot and rollback, the outcome ("ok", "failed" or
"error") and an ISO timestamp.
"""

import json
from datetime import datetime
from pathlib import Path

from workbench.errors import FileOperationError

LOGS_FILE = Path.home() / ".workbench" / "logs.jsonl"


def write_log(entry):
    """Append entry to LOGS_FILE, stamped with the current time.

    Raises FileOperationError if the log cannot be written.
    """
    line = json.dumps({**entry, "timestamp": datetime.now().isoformat()}, ensure_ascii=False)
    try:
        LOGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(LOGS_FILE, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as e:
        raise FileOperationError(f"Failed to write audit log {LOGS_FILE}: {e}") from e


def read_logs(project=None):
    """Entries oldest-first, only those for project when one is given.

    Lines that are not valid JSON are skipped.
    """
    try:
        text = LOGS_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []

    entries = []
    for line in filter(None, map(str.strip, text.splitlines())):
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            continue
        if project is None or entry.get("project") == str(project):
            entries.append(entry)
    return entries
