"""Child-process execution for the AI CLIs and the build tool.

Output is spooled to temporary files rather than held in memory while the
child runs, and only the last output_limit bytes of each stream are returned.
"""

import os
import signal
import subprocess
import tempfile

from workbench.errors import SpawnError
from workbench.models import ActionResult

DEFAULT_OUTPUT_LIMIT = 200_000  # bytes kept per stream
TIMEOUT_EXIT_CODE = 124

# Gradle and the AI CLIs start helper processes of their own
_PROCESS_GROUPS = hasattr(os, "killpg")


def run_process(argv, cwd, timeout=None, output_limit=DEFAULT_OUTPUT_LIMIT):
    """Run argv with cwd as working directory. Returns (exit_code, stdout, stderr).

    Blocks until the child exits. The child leads its own process group; with a
    timeout the whole group is killed when it expires and exit code 124 is
    reported. Raises SpawnError if the process cannot be started at all.
    """
    timed_out = False
    with tempfile.TemporaryFile() as out, tempfile.TemporaryFile() as err:
        try:
            proc = subprocess.Popen(
                [str(a) for a in argv],
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=out,
                stderr=err,
                start_new_session=_PROCESS_GROUPS,
            )
        except OSError as e:
            raise SpawnError(f"Failed to run {argv[0]}: {e}") from e

        try:
            exit_code = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_group(proc, signal.SIGKILL)
            proc.wait()
            exit_code = TIMEOUT_EXIT_CODE
            timed_out = True
        except KeyboardInterrupt:
            _kill_group(proc, signal.SIGTERM)
            raise

        stdout = _read_tail(out, output_limit)
        stderr = _read_tail(err, output_limit)

    if timed_out:
        stderr += f"\nCommand timed out after {timeout}s"
    return exit_code, stdout, stderr


def _kill_group(proc, sig):
    """Send sig to the child and everything it started."""
    if not _PROCESS_GROUPS:
        proc.kill()
        return
    try:
        os.killpg(proc.pid, sig)
    except ProcessLookupError:
        pass  # already gone


def to_result(exit_code, stdout, stderr):
    """Fold a process outcome into the action result envelope."""
    return ActionResult(success=exit_code == 0, output=f"{stdout}\n{stderr}")


def _read_tail(f, limit):
    size = f.seek(0, 2)
    skipped = max(0, size - limit) if limit else 0
    f.seek(skipped)
    text = f.read().decode("utf-8", errors="replace")
    if skipped:
        return f"[... {skipped} bytes truncated ...]\n{text}"
    return text
