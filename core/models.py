from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PROFILE_FILENAME = ".git_profiled_config"

# Subcommands that write commits, tags or other records carrying an author.
DEFAULT_IDENTITY_COMMANDS: tuple[str, ...] = (
    "commit",
    "merge",
    "rebase",
    "cherry-pick",
    "revert",
    "am",
    "tag",
    "pull",
    "add",
)

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def home_dir() -> Path:
    home = os.getenv("HOME")
    return Path(home) if home else Path.home()


def default_profile_path() -> str:
    return str(home_dir() / PROFILE_FILENAME)


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str = ""
    email: str = ""


@dataclass(slots=True)
class LocalIdentity:
    name: str = ""
    email: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.name) and bool(self.email)


class ProfiledConfig(BaseModel):
    git_binary: str = "git"
    profile_path: str = Field(default_factory=default_profile_path)
    identity_commands: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IDENTITY_COMMANDS)
    )
    log_level: LogLevel = "WARNING"
    log_file: str | None = None
