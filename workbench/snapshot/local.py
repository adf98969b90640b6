"""Snapshots stored inside the project, one full tree copy per name.

Layout:
    <project>/.workbench-snapshots/<name>/...
    <project>/.workbench-snapshots/.staging/   in-progress copies, removed when empty

Both create and restore stage their work under .staging first, so a failed
copy never replaces a good snapshot and a failed rollback never leaves the
project half-cleared. Every other directory in the store root is a snapshot.
"""

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

from workbench.errors import FileOperationError, SnapshotNameError, SnapshotNotFoundError
from workbench.models import ActionResult
from workbench.snapshot.base import SnapshotStore
from workbench.snapshot.tree import copy_tree, remove_path

STORE_DIRNAME = ".workbench-snapshots"
STAGING_DIRNAME = ".staging"


class _PartialSwap(FileOperationError):
    """Rollback failed midway and the project could not be put back."""


def validate_snapshot_name(name):
    """Reject names that are not a single path segment, or that are reserved."""
    if not name:
        raise SnapshotNameError("Snapshot name must not be empty")
    if any(sep in name for sep in ("/", "\\", "\0")):
        raise SnapshotNameError(f"Snapshot name must not contain path separators: {name!r}")
    if name in (".", "..", STAGING_DIRNAME):
        raise SnapshotNameError(f"Snapshot name is reserved: {name!r}")


def store_root(project_path):
    return Path(project_path) / STORE_DIRNAME


class LocalSnapshotStore(SnapshotStore):

    def create(self, project_path, name):
        validate_snapshot_name(name)
        project = Path(project_path)
        root = store_root(project)
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create snapshot store {root}: {e}") from e

        staging = _make_work_dir(root, "create-")
        try:
            copy_tree(project, staging, exclude=root)
        except FileOperationError:
            _discard(staging)
            raise

        target = root / name
        replaced = target.exists() or target.is_symlink()
        try:
            if replaced:
                remove_path(target)
            staging.rename(target)
        except OSError as e:
            _discard(staging)
            raise FileOperationError(f"Failed to move snapshot into {target}: {e}") from e
        except FileOperationError:
            _discard(staging)
            raise
        _prune_staging(root)

        output = f"Snapshot created: {name}"
        if replaced:
            output += " (replaced existing)"
        return ActionResult(success=True, output=output)

    def restore(self, project_path, name):
        validate_snapshot_name(name)
        project = Path(project_path)
        root = store_root(project)
        source = root / name
        if not source.is_dir():
            raise SnapshotNotFoundError(f"Snapshot not found: {name}")

        work = _make_work_dir(root, "rollback-")
        incoming = work / "incoming"
        outgoing = work / "outgoing"
        try:
            copy_tree(source, incoming)
            outgoing.mkdir()
            _swap_contents(project, incoming, outgoing)
        except _PartialSwap:
            # outgoing still holds the only copy of some original entries
            raise
        except OSError as e:
            _discard(work)
            raise FileOperationError(f"Failed to prepare rollback in {work}: {e}") from e
        except FileOperationError:
            _discard(work)
            raise

        _discard(work)
        return ActionResult(success=True, output=f"Rolled back to snapshot: {name}")

    def list(self, project_path):
        root = store_root(project_path)
        if not root.is_dir():
            return []

        snapshots = []
        for entry in root.iterdir():
            if entry.name == STAGING_DIRNAME or not entry.is_dir():
                continue
            mtime = entry.stat().st_mtime
            snapshots.append({
                "name": entry.name,
                "path": str(entry),
                "mtime": mtime,
                "created": datetime.fromtimestamp(mtime).strftime("%Y-%m-%d %H:%M"),
            })
        return sorted(snapshots, key=lambda s: s["mtime"])


def _make_work_dir(root, prefix):
    staging_root = root / STAGING_DIRNAME
    try:
        staging_root.mkdir(exist_ok=True)
        return Path(tempfile.mkdtemp(prefix=prefix, dir=staging_root))
    except OSError as e:
        raise FileOperationError(f"Failed to create staging directory in {staging_root}: {e}") from e


def _discard(work):
    shutil.rmtree(work, ignore_errors=True)
    _prune_staging(work.parent.parent)


def _prune_staging(root):
    try:
        (root / STAGING_DIRNAME).rmdir()
    except OSError:
        pass  # not empty: a failed rollback kept its files there


def _swap_contents(project, incoming, outgoing):
    """Move the project's entries out and the staged entries in.

    Every move is a rename inside the project, so each one is atomic. If a move
    fails, the moves already made are reversed before raising.
    """
    moved_out = []
    moved_in = []
    try:
        for entry in os.listdir(project):
            if entry == STORE_DIRNAME:
                continue
            os.rename(project / entry, outgoing / entry)
            moved_out.append(entry)
        for entry in os.listdir(incoming):
            os.rename(incoming / entry, project / entry)
            moved_in.append(entry)
    except OSError as e:
        try:
            for entry in moved_in:
                os.rename(project / entry, incoming / entry)
            for entry in moved_out:
                os.rename(outgoing / entry, project / entry)
        except OSError as undo_error:
            raise _PartialSwap(
                f"Rollback failed ({e}) and could not be undone ({undo_error}). "
                f"Original project files are kept in {outgoing}"
            ) from e
        raise FileOperationError(f"Rollback failed, project left unchanged: {e}") from e
