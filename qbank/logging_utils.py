"""Logging setup for the qbank command line."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

__all__ = ["coerce_level", "configure_logging"]

_MANAGED_HANDLER_FLAG = "_qbank_managed_handler"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _remove_managed_handlers(logger: logging.Logger) -> None:
    """Detach any handlers previously installed by :func:`configure_logging`."""

    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    *,
    log_file: Optional[Path] = None,
    include_console: bool = True,
) -> logging.Logger:
    """Configure the ``qbank`` logger with console and optional file output."""

    logger = logging.getLogger("qbank")
    resolved = coerce_level(level)
    logger.setLevel(resolved)
    _remove_managed_handlers(logger)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if log_file is not None:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(resolved)
        file_handler.setFormatter(formatter)
        setattr(file_handler, _MANAGED_HANDLER_FLAG, True)
        logger.addHandler(file_handler)

    if include_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(resolved)
        console_handler.setFormatter(formatter)
        setattr(console_handler, _MANAGED_HANDLER_FLAG, True)
        logger.addHandler(console_handler)

    return logger
