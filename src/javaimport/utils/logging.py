"""Logging setup for javaimport.

stdout carries the JSON-lines index, so every sink configured here
writes to stderr or to a log file, never to stdout.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

from javaimport.config.models import LoggingConfig
from javaimport.errors import ConfigurationError

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)

# Paths that would interleave log records with the index.
_STDOUT_ALIASES = {"-", "/dev/stdout", "/dev/fd/1", "/proc/self/fd/1"}


class _StdlibBridge(logging.Handler):
    """Forward records from stdlib ``logging`` users into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # depth must point past the logging module's own frames
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _check_log_file(path: Path) -> None:
    if str(path) in _STDOUT_ALIASES or str(path.expanduser().resolve()) in _STDOUT_ALIASES:
        raise ConfigurationError(
            f"Log file {path} is stdout, which is reserved for the JSON-lines index"
        )


def configure_logging(config: LoggingConfig, *, verbose: bool = False) -> str:
    """
    Install the stderr sink and the optional file sink.

    Args:
        config: LoggingConfig with level, format, and file settings.
        verbose: Log at DEBUG regardless of ``config.level``.

    Returns:
        The effective level name.

    Raises:
        ConfigurationError: If the log file would write to stdout.
    """
    if config.file is not None:
        _check_log_file(config.file)

    level = "DEBUG" if verbose else config.level
    serialize = config.format == "json"
    fmt = "{message}" if serialize else _CONSOLE_FORMAT

    logger.remove()
    logger.add(
        sys.stderr,
        format=fmt,
        level=level,
        serialize=serialize,
        colorize=not serialize and sys.stderr.isatty(),
    )
    if config.file is not None:
        logger.add(
            config.file,
            format=fmt,
            level=level,
            serialize=serialize,
            rotation=config.rotation,
            retention=config.retention,
            compression="gz",
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)

    logger.debug("Logging to stderr at {} ({} format)", level, config.format)
    return level
