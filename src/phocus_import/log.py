"""Logging initialization using loguru."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"


def init_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """
    Configure loguru sinks for a command-line run.

    Library modules only emit records; sinks are set up once by the CLI.

    Args:
        level: Minimum level for the console sink
        log_dir: Optional directory for a rotating log file
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)

    if log_dir is not None:
        log_path = Path(log_dir).expanduser()
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path / "phocus_import_{time:YYYYMMDD}.log"),
            rotation="10 MB",
            retention="10 days",
            backtrace=False,
            diagnose=False,
            level="DEBUG",
        )
