from __future__ import annotations


class ProfiledError(Exception):
    """Base class for errors raised by git-profiled itself (never by git)."""


class ConfigReadError(ProfiledError):
    """The repository-local git config could not be read."""


class ConfigWriteError(ProfiledError):
    """A chosen identity value could not be written to the local git config."""

    def __init__(self, key: str, detail: str):
        super().__init__(f"Failed to set {key}: {detail}")
        self.key = key
        self.detail = detail


class ConfigNotFound(ProfiledError):
    """The user-level profile file does not exist."""


class ConfigParseError(ProfiledError):
    """The user-level profile file exists but cannot be read or parsed."""


class EmptyProfileSet(ProfiledError):
    """The profile file parsed cleanly but offers nothing to choose from."""


class InvalidChoice(ProfiledError):
    """Interactive selection input was not a valid profile index."""


class SubprocessLaunchError(ProfiledError):
    """The proxied executable could not be started at all."""
