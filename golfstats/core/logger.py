"""Loguru setup for the scoring engine."""

import sys
from pathlib import Path

from loguru import logger

from golfstats.config.settings import Settings, settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    *,
    engine_only: bool = False,
) -> None:
    """Replace all loguru sinks with a console sink and an optional file sink.

    Args:
        level: Minimum level (TRACE, DEBUG, INFO, ...)
        log_file: Path of a rotating, zipped log file. Console only when None.
        rotation: When to rotate the file (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept (e.g. "7 days")
        engine_only: Drop records that do not come from the golfstats package
    """
    logger.remove()

    record_filter = "golfstats" if engine_only else None

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        filter=record_filter,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            filter=record_filter,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=True,
        )

    logger.debug(f"Logger initialized with level={level}, file={log_file or '-'}")


def configure_logging(config: Settings | None = None) -> None:
    """Apply the logging part of a Settings object (module settings by default)."""
    config = config or settings
    setup_logger(
        level=config.log_level or "INFO",
        log_file=config.log_file,
        rotation=config.log_rotation,
        retention=config.log_retention,
    )


# Only take over loguru sinks on import when the environment asks for it
if settings.logging_requested:
    configure_logging()
