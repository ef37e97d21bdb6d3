from __future__ import annotations

import shutil
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.config import load_config
from core.errors import ConfigNotFound, ConfigParseError, ConfigReadError, EmptyProfileSet
from core.identity import is_repository, read_local_identity
from core.observability import configure_logger
from core.profiles import require_profiles
from core.version import version_banner
from main import run_profiled

RESERVED_PREFIX = "profiled-"
PROG_NAME = "git-profiled"

USAGE = """\
Usage:
  git-profiled [git-subcommand] [arguments]...

Description:
  git-profiled is a transparent wrapper around Git, ensuring that user.name and user.email
  are properly set for each repository. If they are missing, you will be prompted to choose
  from predefined profiles in ~/.git_profiled_config.

Commands:
  profiled-help       Show this usage information (avoid conflicting with 'git help').
  profiled-version    Show the git-profiled version.
  profiled-profiles   List the profiles available for selection.
  profiled-doctor     Show configuration and the identity of the current repository.

Examples:
  git-profiled commit -m 'Your commit message'
  git-profiled add .
  git-profiled status
  git-profiled profiled-help"""

# Wrapper-only commands; reached as `git-profiled profiled-<name>` and never forwarded to git.
app = typer.Typer(add_completion=False, help="git-profiled wrapper commands")
console = Console()


def print_usage() -> None:
    typer.echo(USAGE)


@app.command(name="help")
def help_() -> None:
    print_usage()


@app.command()
def version() -> None:
    typer.echo(version_banner())


@app.command()
def profiles() -> None:
    cfg = load_config()
    try:
        found = require_profiles(cfg.profile_path)
    except (ConfigNotFound, ConfigParseError, EmptyProfileSet) as exc:
        console.print(f"Error: {exc}", style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    table = Table(title=f"Profiles in {cfg.profile_path}")
    table.add_column("#", justify="right")
    table.add_column("Key", style="green")
    table.add_column("Name")
    table.add_column("Email")
    for index, profile in enumerate(found):
        table.add_row(str(index), escape(profile.key), escape(profile.name), escape(profile.email))
    console.print(table)


@app.command()
def doctor() -> None:
    cfg = load_config()
    git_path = shutil.which(cfg.git_binary)
    profile_path = Path(cfg.profile_path)
    try:
        profile_status = f"{len(require_profiles(profile_path))} selectable"
    except (ConfigNotFound, ConfigParseError, EmptyProfileSet) as exc:
        profile_status = str(exc)

    in_repo = is_repository()
    user_name = user_email = "n/a"
    if in_repo:
        try:
            identity = read_local_identity(git_binary=cfg.git_binary)
            user_name = identity.name or "unset"
            user_email = identity.email or "unset"
        except ConfigReadError as exc:
            user_name = user_email = f"error: {exc}"

    table = Table(title="git-profiled Doctor")
    table.add_column("Check")
    table.add_column("Value")
    table.add_row("Version", version_banner())
    table.add_row("Git Binary", git_path or f"{cfg.git_binary} (not found)")
    table.add_row("Profile File", str(profile_path))
    table.add_row("Profiles", escape(profile_status))
    table.add_row("Repository", str(in_repo))
    table.add_row("Local user.name", escape(user_name))
    table.add_row("Local user.email", escape(user_email))
    table.add_row("Identity Commands", ", ".join(cfg.identity_commands) or "none")
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    cfg = load_config()
    configure_logger(cfg)

    if not args:
        print_usage()
        raise SystemExit(1)

    if args[0].startswith(RESERVED_PREFIX):
        app(args=[args[0].removeprefix(RESERVED_PREFIX), *args[1:]], prog_name=PROG_NAME)
        return

    raise SystemExit(run_profiled(args, config=cfg))


if __name__ == "__main__":
    main()
