import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "statecraft"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logger(name: str = LOGGER_NAME, level_name: str = "INFO", log_file: Optional[Path] = None):
    """Configure the engine logger: stdout always, plus an optional log file."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(handler)

    if log_file is not None:
        target = str(Path(log_file).resolve())
        already = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == target
            for h in logger.handlers
        )
        if not already:
            file_handler = logging.FileHandler(target, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger


def get_logger():
    """Shared engine logger; configured with defaults on first use."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        return setup_logger()
    return logger
