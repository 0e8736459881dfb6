# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.path import user_data_dir

_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configured_level() -> int:
    name = (os.getenv("PM_LOG_LEVEL", "INFO") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_dir: Path | None = None) -> Path:
    """
    Configure application logging.
    Logs rotate under <data dir>/logs; a console handler mirrors them.
    """
    target_dir = log_dir or (user_data_dir() / "logs")
    target_dir.mkdir(parents=True, exist_ok=True)

    log_file = target_dir / "app.log"

    logger = logging.getLogger()
    logger.setLevel(_configured_level())

    # Clear any existing handlers so repeated setup does not duplicate output
    logger.handlers.clear()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    return log_file
