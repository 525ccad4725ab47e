"""Terminal hand-off from the entrypoint to ``notary-server``.

On POSIX the entrypoint process image is replaced with the server. Where
image replacement is not available the server runs as a child process and
its exit status is passed through unchanged.
"""

from __future__ import annotations

import errno
import os
import subprocess
import sys
from typing import NoReturn

from notary_entrypoint.mode import LaunchPlan
from notary_entrypoint.observability import get_logger, log_context

logger = get_logger(__name__)

# Same statuses a POSIX shell reports when ``exec`` fails.
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


class LaunchError(Exception):
    """Raised when the target executable cannot be found or started."""

    def __init__(self, executable: str, cause: OSError) -> None:
        self.executable = executable
        self.cause = cause
        self.exit_code = exit_code_for(cause)
        reason = cause.strerror or str(cause)
        super().__init__(f"Could not start {executable}: {reason}")


def exit_code_for(exc: OSError) -> int:
    """Map an exec/spawn failure to a shell-compatible exit status."""
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return EXIT_NOT_FOUND
    return EXIT_NOT_EXECUTABLE


def supports_exec() -> bool:
    """Return True when ``os.execvp`` truly replaces the process image."""
    return os.name == "posix"


def _flush_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()


def exec_target(plan: LaunchPlan) -> NoReturn:
    """Replace the current process with the plan's executable."""
    argv = list(plan.argv)
    try:
        os.execvp(plan.executable, argv)
    except OSError as exc:
        raise LaunchError(plan.executable, exc) from exc
    # os.execvp only returns by raising.
    raise AssertionError("os.execvp returned")


def spawn_target(plan: LaunchPlan) -> NoReturn:
    """Run the plan's executable as a child and exit with its status."""
    try:
        completed = subprocess.run(list(plan.argv), check=False)
    except OSError as exc:
        raise LaunchError(plan.executable, exc) from exc
    sys.exit(completed.returncode)


def hand_off(plan: LaunchPlan) -> NoReturn:
    """Transfer control to the target executable. Never returns.

    Buffered output is flushed first so the status lines always precede
    anything the server writes.
    """
    strategy = "exec" if supports_exec() else "spawn"
    with log_context(mode=plan.mode.value, strategy=strategy):
        logger.debug("Handing off to %s", " ".join(plan.argv))
    _flush_streams()
    if strategy == "exec":
        exec_target(plan)
    spawn_target(plan)


__all__ = [
    "EXIT_NOT_EXECUTABLE",
    "EXIT_NOT_FOUND",
    "LaunchError",
    "exec_target",
    "exit_code_for",
    "hand_off",
    "spawn_target",
    "supports_exec",
]
