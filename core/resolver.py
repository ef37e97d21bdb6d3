from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger
from rich.console import Console
from rich.prompt import Prompt

from core.errors import (
    ConfigNotFound,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    EmptyProfileSet,
    InvalidChoice,
)
from core.identity import is_repository, read_local_identity, write_config_value
from core.models import Profile, ProfiledConfig
from core.profiles import require_profiles
from core.version import version_banner

ChoiceInputProvider = Callable[[Console], str]

CHOICE_PROMPT = "Choose a profile (enter a number)"

# ASCII digits only; int() alone also takes "1_0" and non-ASCII digits.
_CHOICE_PATTERN = re.compile(r"[+-]?[0-9]+")


def requires_identity(args: Sequence[str], commands: Sequence[str]) -> bool:
    if not args:
        return False
    return args[0] in commands


def select_profile(profiles: Sequence[Profile], raw: str) -> Profile:
    value = raw.strip()
    if not _CHOICE_PATTERN.fullmatch(value):
        raise InvalidChoice(f"Not a number: {raw!r}")
    index = int(value)
    if index < 0 or index >= len(profiles):
        raise InvalidChoice(f"Choice {index} is out of range 0..{len(profiles) - 1}")
    return profiles[index]


def format_profile_line(index: int, profile: Profile) -> str:
    return f"[{index}] {profile.key} -> {profile.name} <{profile.email}>"


def _prompt_for_choice(console: Console) -> str:
    try:
        return Prompt.ask(f"[cyan]{CHOICE_PROMPT}[/cyan]", console=console)
    except EOFError:
        return ""


class IdentityResolver:
    """Makes sure the current repository has a local user.name/user.email.

    When either is missing the user picks one of the profiles from the
    profile file and the choice is written with `git config --local`.
    """

    def __init__(
        self,
        config: ProfiledConfig,
        *,
        cwd: Path | None = None,
        console: Console | None = None,
        input_provider: ChoiceInputProvider | None = None,
    ):
        self.config = config
        self.cwd = cwd
        self.console = console or Console(soft_wrap=True)
        self.input_provider = input_provider or _prompt_for_choice

    def _print(self, message: str, style: str) -> None:
        # One message per line, never re-wrapped to the terminal width.
        self.console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)

    def _error(self, message: str) -> None:
        self._print(message, "red")

    def _green(self, message: str) -> None:
        self._print(message, "green")

    def resolve(self) -> bool:
        if not is_repository(self.cwd):
            logger.debug("Not a git repository; identity check skipped.")
            return True

        try:
            identity = read_local_identity(git_binary=self.config.git_binary, cwd=self.cwd)
        except ConfigReadError as exc:
            logger.debug("Local identity probe failed: {}", exc)
            self._error(f"Error: {exc}")
            return False
        if identity.complete:
            logger.debug("Local user.name and user.email already configured.")
            return True

        try:
            profiles = require_profiles(self.config.profile_path)
        except ConfigNotFound:
            self._error(
                "Error: user name/email not set in .git/config, "
                f"and no {Path(self.config.profile_path).name} found."
            )
            return False
        except ConfigParseError as exc:
            self._error(f"Error reading {self.config.profile_path}: {exc}")
            return False
        except EmptyProfileSet as exc:
            self._error(f"Error: {exc}")
            return False

        profile = self._choose(profiles)
        self._persist(profile)

        self._green(version_banner())
        self._green("Successfully set local user information.")
        self._green(f"Email: {profile.email}")
        self._green(f"Name: {profile.name}")
        return True

    def _choose(self, profiles: Sequence[Profile]) -> Profile:
        self._print(version_banner(), "white")
        for index, profile in enumerate(profiles):
            self._green(format_profile_line(index, profile))

        raw = self.input_provider(self.console)
        try:
            profile = select_profile(profiles, raw)
        except InvalidChoice as exc:
            logger.debug("Rejected profile choice: {}", exc)
            self._error("Invalid choice.")
            raise SystemExit(1) from exc
        logger.debug("Selected profile [{}]", profile.key)
        return profile

    def _persist(self, profile: Profile) -> None:
        for key, value in (("user.email", profile.email), ("user.name", profile.name)):
            try:
                write_config_value(
                    key, value, git_binary=self.config.git_binary, cwd=self.cwd
                )
            except ConfigWriteError as exc:
                self._error(str(exc))
                raise SystemExit(1) from exc
