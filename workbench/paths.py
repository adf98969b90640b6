import os
from pathlib import Path

from workbench.errors import HomeDirectoryError


def resolve_project_path(raw_path):
    """Turn a user-supplied project path into an absolute Path.

    Only the "~/" form is expanded, using HOME from the environment. The path
    is not required to exist.
    """
    raw_path = str(raw_path)
    if raw_path.startswith("~/"):
        home = os.environ.get("HOME")
        if not home:
            raise HomeDirectoryError("HOME not found")
        return Path(os.path.abspath(os.path.join(home, raw_path[2:])))
    return Path(os.path.abspath(raw_path))
