"""Per-project advisory lock.

snapshot, rollback and ai_execute all rewrite the project tree, so they are
serialized through a flock on a lock file keyed by the resolved project path.
The lock file lives under ~/.workbench/locks so taking it never adds files to
the project itself.
"""

import hashlib
from contextlib import contextmanager
from pathlib import Path

from workbench.errors import FileOperationError, ProjectLockedError

try:
    import fcntl
    _FCNTL_AVAILABLE = True
except ImportError:
    _FCNTL_AVAILABLE = False  # Windows: no locking


LOCKS_DIR = Path.home() / ".workbench" / "locks"


def lock_file(project_path):
    """Path to the lock file used to serialize mutations of this project."""
    slug = hashlib.md5(str(project_path).encode()).hexdigest()[:12]
    try:
        LOCKS_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(f"Failed to create lock directory {LOCKS_DIR}: {e}") from e
    return LOCKS_DIR / f"{slug}.lock"


@contextmanager
def project_lock(project_path):
    """Hold the project's lock for the duration of the block.

    Does not wait: if another process (or another open handle in this one)
    holds it, ProjectLockedError is raised straight away.
    """
    path = lock_file(project_path)
    try:
        lock_fd = open(path, "w")
    except OSError as e:
        raise FileOperationError(f"Failed to open lock file {path}: {e}") from e
    try:
        if _FCNTL_AVAILABLE:
            try:
                fcntl.flock(lock_fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            except BlockingIOError:
                raise ProjectLockedError(
                    f"Another action is already running on {project_path}"
                )
        try:
            yield
        finally:
            if _FCNTL_AVAILABLE:
                fcntl.flock(lock_fd, fcntl.LOCK_UN)
    finally:
        lock_fd.close()
