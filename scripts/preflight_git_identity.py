from __future__ import annotations

from pathlib import Path

from core.config import load_config
from core.errors import ConfigReadError
from core.identity import is_repository, read_local_identity


def run_preflight(cwd: Path | None = None) -> int:
    cfg = load_config()
    if not is_repository(cwd):
        print("Not a git repository; nothing to check.")
        return 0
    try:
        identity = read_local_identity(git_binary=cfg.git_binary, cwd=cwd)
    except ConfigReadError as exc:
        print(f"Git identity preflight failed: {exc}")
        return 1
    if identity.complete:
        print(f"Git identity preflight passed: {identity.name} <{identity.email}>")
        return 0

    print("Git identity preflight failed:")
    if not identity.name:
        print("- local user.name is not set.")
    if not identity.email:
        print("- local user.email is not set.")
    print("\nRecommended fix:")
    print("  git-profiled commit   # prompts for a profile from ~/.git_profiled_config")
    return 1


def main() -> int:
    return run_preflight()


if __name__ == "__main__":
    raise SystemExit(main())
