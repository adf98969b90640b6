import os
import shutil
from pathlib import Path

from workbench.errors import FileOperationError


def copy_tree(source, dest, exclude=None):
    """Recursively copy source into dest, skipping the exclude path.

    exclude is compared by path value, not by name, so a nested directory
    that happens to share the excluded name is still copied. Symlinks are
    recreated as links and never followed. FIFOs, sockets and devices are
    skipped. Fails fast on the first error and leaves whatever was already
    copied in place.
    """
    source = Path(source)
    dest = Path(dest)
    exclude = Path(exclude) if exclude is not None else None

    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(f"Failed to create directory {dest}: {e}") from e

    try:
        entries = list(os.scandir(source))
    except OSError as e:
        raise FileOperationError(f"Failed to read directory {source}: {e}") from e

    for entry in entries:
        path = Path(entry.path)
        if exclude is not None and path == exclude:
            continue

        target = dest / entry.name
        try:
            if entry.is_symlink():
                _copy_link(path, target)
            elif entry.is_dir():
                copy_tree(path, target, exclude)
            elif entry.is_file():
                shutil.copy2(path, target)
            # anything else (fifo, socket, device) is not project content
        except OSError as e:
            raise FileOperationError(f"Failed to copy {path} to {target}: {e}") from e


def remove_path(path):
    """Delete a file, symlink or directory tree."""
    path = Path(path)
    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as e:
        raise FileOperationError(f"Failed to delete {path}: {e}") from e


def _copy_link(link, target):
    if target.is_symlink() or target.exists():
        remove_path(target)
    os.symlink(os.readlink(link), target)
