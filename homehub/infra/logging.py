from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from homehub.config import PROJECT_ROOT, SETTINGS, Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
MAX_LOG_BYTES = 2_000_000
LOG_BACKUPS = 3


def log_path(settings: Settings = SETTINGS) -> Path:
    log_dir = Path(settings.log_dir)
    if not log_dir.is_absolute():
        log_dir = PROJECT_ROOT / log_dir
    return log_dir / settings.log_file


def setup_logging(settings: Settings = SETTINGS) -> Path:
    """Send homehub logs to a rotating file and the console; returns the log file path."""
    log_file = log_path(settings)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(
        log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=settings.log_level,
        handlers=[file_handler, console_handler],
        force=True,
    )
    # SQL echo stays off unless explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return log_file
