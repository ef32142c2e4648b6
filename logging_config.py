# logging_config.py
import logging
from logging.handlers import RotatingFileHandler

import utils

_LOGGER = None


def configure_logging(log_file: str | None = None, level: int | None = None):
    """Attach console and rotating file handlers to the root logger once."""
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    settings = utils.get_log_settings()
    logger = logging.getLogger()
    logger.setLevel(level if level is not None else settings["level"])

    formatter = logging.Formatter(fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    fh = RotatingFileHandler(log_file or settings["log_file"], maxBytes=1_000_000, backupCount=3)
    fh.setFormatter(formatter)
    logger.addHandler(fh)

    _LOGGER = logger
    return logger


def get_logger(name: str):
    return logging.getLogger(name)
