"""Logging sinks."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def configure_logging(
    level: str = "WARNING",
    *,
    verbose: bool = False,
    log_file: Path | None = None,
) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else level.upper())
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level="DEBUG", rotation="1 MB")
