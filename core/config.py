from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from core.models import DEFAULT_IDENTITY_COMMANDS, ProfiledConfig, default_profile_path


def _settings_env(env_file: str | Path | None = None) -> dict[str, str]:
    # .env values are read, never exported: git inherits os.environ untouched.
    file_values = dotenv_values(env_file) if env_file is not None else dotenv_values()
    env = {key: value for key, value in file_values.items() if value is not None}
    env.update(os.environ)
    return env


def _env_list(env: Mapping[str, str], key: str, default: list[str]) -> list[str]:
    value = env.get(key)
    if value is None:
        return list(default)
    return _split_commands(value)


def _split_commands(value: str) -> list[str]:
    out: list[str] = []
    for raw in value.split(","):
        item = raw.strip()
        if item and item not in out:
            out.append(item)
    return out


def load_config(
    overrides: dict[str, Any] | None = None, *, env_file: str | Path | None = None
) -> ProfiledConfig:
    env = _settings_env(env_file)
    commands = _env_list(env, "GIT_PROFILED_COMMANDS", list(DEFAULT_IDENTITY_COMMANDS))
    for extra in _split_commands(env.get("GIT_PROFILED_EXTRA_COMMANDS", "")):
        if extra not in commands:
            commands.append(extra)
    data: dict[str, Any] = {
        "git_binary": env.get("GIT_PROFILED_GIT_BINARY", "git"),
        "profile_path": env.get("GIT_PROFILED_CONFIG") or default_profile_path(),
        "identity_commands": commands,
        "log_level": env.get("GIT_PROFILED_LOG_LEVEL", "WARNING").strip().upper(),
        "log_file": env.get("GIT_PROFILED_LOG_FILE") or None,
    }
    if overrides:
        data.update(overrides)
    return ProfiledConfig(**data)
