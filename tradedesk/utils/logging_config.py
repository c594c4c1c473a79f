# tradedesk/utils/logging_config.py
"""
Logging setup for the CLI and the API server.

Engine modules only create named loggers; handlers are installed here,
once, by whichever entry point is running.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Optional


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _build_handlers(
    formatter: logging.Formatter,
    log_file: Optional[str],
    max_bytes: int,
    backup_count: int
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "INFO",
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> logging.Logger:
    """
    Replace the root logger's handlers with stdout and an optional rotating file.

    Args:
        level: Logging level name; unknown names fall back to INFO
        format_str: Record format, DEFAULT_FORMAT when omitted
        log_file: Rotating log file path, parent directories are created
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_str or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(numeric_level)
    for handler in _build_handlers(formatter, log_file, max_bytes, backup_count):
        handler.setLevel(numeric_level)
        root_logger.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def configure_logging(settings, verbose: bool = False) -> logging.Logger:
    """Apply a ``logging`` config section; ``verbose`` forces DEBUG."""
    return setup_logging(
        level="DEBUG" if verbose else settings.level,
        format_str=settings.format,
        log_file=settings.file,
    )
