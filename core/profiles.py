"""User-level profile file (~/.git_profiled_config).

The file is TOML with one top-level table per identity:

    [work]
    name = "A"
    email = "a@x.com"

`tomllib` returns plain dicts, which keep key order in practice but carry no
promise about it, and selection indices must follow the file. So the file is
read twice: a raw line scan for section order, and a structured parse for the
values. Only sections seen by both passes are offered, in scan order.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from loguru import logger

from core.errors import ConfigNotFound, ConfigParseError, EmptyProfileSet
from core.models import Profile

PROFILE_FIELDS = ("name", "email")


def scan_section_order(text: str) -> list[str]:
    order: list[str] = []
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if line.startswith("[") and line.endswith("]"):
            order.append(line[1:-1])
    return order


def _has_direct_field(table: dict[str, Any]) -> bool:
    return any(not isinstance(value, dict) for value in table.values())


def parse_profile_fields(text: str) -> dict[str, dict[str, str]]:
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(str(exc)) from exc

    fields: dict[str, dict[str, str]] = {}
    for section, table in document.items():
        if not isinstance(table, dict) or not _has_direct_field(table):
            continue
        values: dict[str, str] = {}
        for field in PROFILE_FIELDS:
            value = table.get(field, "")
            if not isinstance(value, str):
                raise ConfigParseError(
                    f"[{section}] {field} must be a string, got {type(value).__name__}"
                )
            values[field] = value
        fields[section] = values
    return fields


def profiles_from_text(text: str) -> list[Profile]:
    fields = parse_profile_fields(text)
    profiles: list[Profile] = []
    for key in scan_section_order(text):
        values = fields.get(key)
        if values is None:
            logger.debug("Skipping section [{}]: no name/email table", key)
            continue
        profiles.append(Profile(key=key, **values))
    return profiles


def load_profiles(path: str | Path) -> list[Profile]:
    profile_path = Path(path)
    if not profile_path.exists():
        raise ConfigNotFound(f"Profile file not found: {profile_path}")
    try:
        text = profile_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(f"Cannot read {profile_path}: {exc}") from exc
    profiles = profiles_from_text(text)
    logger.debug("Loaded {} profile(s) from {}", len(profiles), profile_path)
    return profiles


def require_profiles(path: str | Path) -> list[Profile]:
    profiles = load_profiles(path)
    if not profiles:
        raise EmptyProfileSet(f"No profile with a name/email section in {path}")
    return profiles
