import logging
import os
from logging.handlers import TimedRotatingFileHandler
from datetime import datetime

from recruitment.core.config import settings

ROOT_LOGGER_NAME = "recruitment"

# Root logger, configured once
_root_logger = None


def _configure_root(log_folder, backup_count):
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root.handlers.clear()

    # Prevent propagation
    root.propagate = False

    os.makedirs(log_folder, exist_ok=True)

    current_date = datetime.now().strftime('%Y_%m_%d')
    log_file_path = os.path.join(log_folder, f"app_{current_date}.log")

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    file_handler = TimedRotatingFileHandler(
        log_file_path,
        when="midnight",
        interval=1,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.LOG_LEVEL.upper())
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    return root


def setup_logger(name=ROOT_LOGGER_NAME, log_folder=None, backup_count=7):
    """
    Return a logger below the shared ``recruitment`` logger.

    The file and console handlers are attached to the root logger the first
    time this is called; module loggers inherit them.
    """
    global _root_logger
    if _root_logger is None:
        _root_logger = _configure_root(log_folder or str(settings.LOGS_DIR), backup_count)

    if not name or name == ROOT_LOGGER_NAME:
        return _root_logger
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


__all__ = ['setup_logger']
