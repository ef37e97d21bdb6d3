from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from core.models import ProfiledConfig


def configure_logger(config: ProfiledConfig) -> None:
    """One-shot sink setup; git's own output never passes through here."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=config.log_level,
        format="<level>{level: <8}</level> | {message}",
        backtrace=False,
        diagnose=False,
    )
    if config.log_file:
        log_path = Path(config.log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            serialize=True,
            level="DEBUG",
            backtrace=False,
            diagnose=False,
        )
