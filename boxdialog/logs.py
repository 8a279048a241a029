"""
Logging setup.

The dialog owns the terminal while it is on screen, so records never go to
stdout/stderr; they go to a file when one is configured and are discarded
otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import LoggingConfig, get_config

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_PACKAGE_LOGGER = "boxdialog"

_installed_handler: Optional[logging.Handler] = None


def configure_logging(cfg: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Attach a file handler to the package logger according to `cfg`.

    Calling it again replaces the handler installed by the previous call.

    Args:
        cfg: Logging section (defaults to the loaded configuration)

    Returns:
        The package logger
    """
    global _installed_handler

    cfg = get_config().logging if cfg is None else cfg
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, cfg.level, logging.WARNING))

    if _installed_handler is not None:
        logger.removeHandler(_installed_handler)
        _installed_handler.close()
        _installed_handler = None

    if cfg.file:
        handler = logging.FileHandler(Path(cfg.file).expanduser(), encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _installed_handler = handler

    return logger
