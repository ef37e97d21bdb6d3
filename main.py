from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger
from rich.console import Console

from core.config import load_config
from core.errors import SubprocessLaunchError
from core.identity import is_repository
from core.models import ProfiledConfig
from core.observability import configure_logger
from core.proxy import run_git
from core.resolver import ChoiceInputProvider, IdentityResolver, requires_identity

console = Console(soft_wrap=True)


def run_profiled(
    args: Sequence[str],
    *,
    config: ProfiledConfig | None = None,
    cwd: Path | None = None,
    input_provider: ChoiceInputProvider | None = None,
) -> int:
    """Gate identity-sensitive subcommands, then hand the whole argv to git."""
    cfg = config or load_config()
    if requires_identity(args, cfg.identity_commands) and is_repository(cwd):
        resolver = IdentityResolver(cfg, cwd=cwd, console=console, input_provider=input_provider)
        if not resolver.resolve():
            console.print(
                "Error: user name/email must be set, and no valid configuration could be found.",
                style="red",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return 1

    try:
        return run_git(args, executable=cfg.git_binary, cwd=cwd)
    except SubprocessLaunchError as exc:
        logger.debug("Launch failure: {}", exc)
        console.print(str(exc), style="red", markup=False, highlight=False, soft_wrap=True)
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    cfg = load_config()
    configure_logger(cfg)
    return run_profiled(sys.argv[1:] if argv is None else argv, config=cfg)


if __name__ == "__main__":
    raise SystemExit(main())
