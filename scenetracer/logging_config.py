"""Logging configuration for scenetracer."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config import LOG_FORMAT, LOG_LEVEL

CONSOLE_HANDLER_NAME = "scenetracer-console"


def setup_logging(
    name: str = "scenetracer",
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up logging for the package (or any named logger).

    Calling this again updates the level and format of the existing
    handlers instead of adding a second console handler.

    Parameters
    ----------
    name : str, optional
        Logger name (default: "scenetracer")
    level : str, optional
        Log level name, e.g. DEBUG or INFO (default: config.LOG_LEVEL)
    log_file : Path, optional
        Path of an additional rotating log file

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    if level is None:
        level = LOG_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(LOG_FORMAT)

    if not any(h.get_name() == CONSOLE_HANDLER_NAME for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
