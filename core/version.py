from __future__ import annotations

__version__ = "0.0.3"


def version_banner() -> str:
    return f"git-profiled version {__version__}"
