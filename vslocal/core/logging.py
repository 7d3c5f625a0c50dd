"""Structured logging for vslocal: rotating file handler, operation logging."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


_logger: logging.Logger | None = None


def setup_logging(
    log_level: str = "INFO",
    logs_dir: Path | None = None,
    log_file: str = "vslocal.log",
    console_level: str | None = None,
    max_bytes: int = 1024 * 1024,  # 1MB
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the vslocal logger.

    The commands report to the user on stdout/stderr themselves, so the
    console handler is only attached when *console_level* is given.
    Returns the configured logger.
    """
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger("vslocal")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console_level is not None:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper(), logging.WARNING))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            logs_dir / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the vslocal logger. Sets up with defaults if not yet configured."""
    global _logger
    if _logger is None:
        return setup_logging()
    return _logger


def reset_logger() -> None:
    """Reset the global logger (for testing)."""
    global _logger
    if _logger is not None:
        for handler in _logger.handlers:
            handler.close()
        _logger.handlers.clear()
        _logger = None


def log_operation(
    command: str,
    root: Path | str,
    targets: list[str],
    error: str | None = None,
) -> None:
    """Log the outcome of one command."""
    logger = get_logger()
    joined = ",".join(targets)
    if error:
        logger.error("Command name=%s root=%s targets=%s error=%s", command, root, joined, error)
    else:
        logger.info("Command name=%s root=%s targets=%s", command, root, joined)


def log_error(
    category: str,
    message: str,
    **extra: Any,
) -> None:
    """Log a classified error."""
    logger = get_logger()
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    logger.error("Error category=%s message=%s %s", category, message, extra_str)
