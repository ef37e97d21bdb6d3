from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from core.errors import SubprocessLaunchError


def run_git(
    args: Sequence[str], *, executable: str = "git", cwd: Path | None = None
) -> int:
    """Run `executable args...` on the caller's stdin/stdout/stderr; return its exit code."""
    command = [executable, *args]
    logger.debug("Proxying to Git: {}", " ".join(command))
    try:
        process = subprocess.Popen(  # noqa: S603
            command,
            cwd=str(cwd) if cwd else None,
        )
    except OSError as exc:
        raise SubprocessLaunchError(f"Error running {executable} command: {exc}") from exc

    with process:
        while True:
            try:
                returncode = process.wait()
                break
            except KeyboardInterrupt:
                # The terminal delivers SIGINT to git as well; git decides how to exit.
                continue

    if returncode < 0:
        # Killed by a signal: report it the way a shell would.
        returncode = 128 - returncode
    logger.debug("{} exited with status {}", executable, returncode)
    return returncode
