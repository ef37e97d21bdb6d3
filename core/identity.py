from __future__ import annotations

import subprocess
from pathlib import Path

from loguru import logger

from core.errors import ConfigReadError, ConfigWriteError
from core.models import LocalIdentity

# `git config --get` exits 1 when the key is simply not set.
_KEY_NOT_SET = 1


def is_repository(cwd: Path | None = None) -> bool:
    try:
        base = cwd or Path.cwd()
    except OSError as exc:
        logger.error("Cannot get current directory: {}", exc)
        return False
    # A gitfile (worktrees, submodules) counts as well as a directory.
    return (base / ".git").exists()


def _run_git(
    args: list[str], *, git_binary: str, cwd: Path | None
) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [git_binary, *args],
        cwd=str(cwd) if cwd else None,
        check=False,
        text=True,
        capture_output=True,
    )


def read_config_value(
    key: str, *, git_binary: str = "git", cwd: Path | None = None
) -> str:
    try:
        result = _run_git(
            ["config", "--local", "--get", key], git_binary=git_binary, cwd=cwd
        )
    except OSError as exc:
        raise ConfigReadError(f"Failed to get {key}: {exc}") from exc
    if result.returncode == _KEY_NOT_SET:
        return ""
    if result.returncode != 0:
        stderr = result.stderr.strip() or result.stdout.strip()
        raise ConfigReadError(f"Failed to get {key}: {stderr}")
    return result.stdout.rstrip("\r\n")


def read_local_identity(*, git_binary: str = "git", cwd: Path | None = None) -> LocalIdentity:
    email = read_config_value("user.email", git_binary=git_binary, cwd=cwd)
    name = read_config_value("user.name", git_binary=git_binary, cwd=cwd)
    logger.debug("Local identity name={!r} email={!r}", name, email)
    return LocalIdentity(name=name, email=email)


def write_config_value(
    key: str, value: str, *, git_binary: str = "git", cwd: Path | None = None
) -> None:
    try:
        result = _run_git(["config", "--local", key, value], git_binary=git_binary, cwd=cwd)
    except OSError as exc:
        raise ConfigWriteError(key, str(exc)) from exc
    if result.returncode != 0:
        stderr = result.stderr.strip() or result.stdout.strip()
        raise ConfigWriteError(key, stderr or f"git exited with status {result.returncode}")
    logger.debug("Set local {} via git config", key)
