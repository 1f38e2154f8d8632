"""
Logging setup for the API.

Console logging is always on; file logging is optional and writes one file
per day into ``LOG_DIR``.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "listo"

formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def setup_logging(level: str = "INFO", enable_file: bool = False, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``listo`` logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_file: If True, also log to ``<log_dir>/listo_YYYYMMDD.log``
        log_dir: Directory for the log file

    Handlers are attached once; calling this again only adjusts the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if enable_file:
        directory = Path(log_dir or "./logs")
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"listo_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
