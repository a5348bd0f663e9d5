"""Process-wide logging setup shared by the terminal and web entry points."""

from __future__ import annotations

import logging
import logging.handlers

from rrkeeper.config import Config

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def setup_logging(config: Config, *, console: bool = True) -> logging.Logger:
    """
    Configure the root logger once: optional console output plus a rotating
    log file under the configured log directory.

    Returns the package logger.
    """
    log_file = config.log_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_file, maxBytes=2 * 1024 * 1024, backupCount=3,  # 2 MB × 3 files
            encoding="utf-8",
        ),
    ]
    if console:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, config.logging.level),
        format=_FORMAT,
        handlers=handlers,
    )
    return logging.getLogger("rrkeeper")
