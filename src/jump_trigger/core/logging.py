"""Logging configuration and utilities."""

import logging
import sys
from pathlib import Path

LOG_NAMESPACE = "jump_trigger"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ("PIL", "pyautogui")


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the jump_trigger namespace.

    Calling it again replaces the previous handlers, so the CLI and the
    replay script can both call it safely.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to an additional log file
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger(LOG_NAMESPACE)
    package_logger.setLevel(log_level)
    package_logger.handlers.clear()
    package_logger.addHandler(_make_handler(logging.StreamHandler(sys.stdout), log_level))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        package_logger.addHandler(_make_handler(logging.FileHandler(log_path), log_level))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the jump_trigger namespace.

    Args:
        name: Module name (typically __name__)
    """
    if name != LOG_NAMESPACE and not name.startswith(LOG_NAMESPACE + "."):
        name = f"{LOG_NAMESPACE}.{name}"

    return logging.getLogger(name)
