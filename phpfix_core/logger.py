"""
phpfix logging module - debug log on disk for troubleshooting fixer runs.

The log is written to phpfix.log in the directory named by PHPFIX_LOG_DIR,
or in the current working directory when it is not set. A full log is
rolled over to phpfix.log.1 .. phpfix.log.N and the oldest is dropped.
"""

import logging
import logging.handlers
import os
from enum import Enum
from pathlib import Path
from typing import Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    RELEASE = "RELEASE"


LOG_FILENAME = "phpfix.log"
LOG_DIR_ENV = "PHPFIX_LOG_DIR"
LOG_LEVEL_ENV = "PHPFIX_LOG_LEVEL"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3

_logger: Optional[logging.Logger] = None


def _get_log_path() -> Path:
    log_dir = os.environ.get(LOG_DIR_ENV)
    return (Path(log_dir) if log_dir else Path.cwd()) / LOG_FILENAME


def _get_log_level() -> LogLevel:
    value = os.environ.get(LOG_LEVEL_ENV, LogLevel.DEBUG.value).upper()
    try:
        return LogLevel(value)
    except ValueError:
        return LogLevel.DEBUG


def _initialize_logger() -> logging.Logger:
    global _logger

    log_path = _get_log_path()
    level = _get_log_level()

    logger = logging.getLogger("phpfix")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    _close_handlers(logger)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8',
        delay=True
    )
    file_handler.setFormatter(logging.Formatter(
        '[%(asctime)s] [%(levelname)-8s] [%(module)s:%(funcName)s:%(lineno)d] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    file_handler.setLevel(logging.DEBUG if level == LogLevel.DEBUG else logging.WARNING)
    logger.addHandler(file_handler)

    _logger = logger
    _logger.debug(f"phpfix logger started (level {level.value}, file {log_path})")
    return _logger


def _close_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def reset():
    """Close the log file; the next message reopens it from the environment."""
    global _logger
    if _logger is not None:
        _close_handlers(_logger)
    _logger = None


def get_logger() -> logging.Logger:
    if _logger is None:
        return _initialize_logger()
    return _logger


def debug(msg: str, *args, **kwargs):
    get_logger().debug(msg, *args, **kwargs)


def info(msg: str, *args, **kwargs):
    get_logger().info(msg, *args, **kwargs)


def warning(msg: str, *args, **kwargs):
    get_logger().warning(msg, *args, **kwargs)


def error(msg: str, *args, **kwargs):
    get_logger().error(msg, *args, **kwargs)


def exception(msg: str, *args, **kwargs):
    """Log with the current exception's traceback"""
    get_logger().exception(msg, *args, **kwargs)


def assert_true(condition, msg: str):
    """Log error and raise RuntimeError if condition is false"""
    if not condition:
        get_logger().error(msg)
        raise RuntimeError(msg)
