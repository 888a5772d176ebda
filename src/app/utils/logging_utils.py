import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOGGER_NAMES = ("main", "gemini", "transform", "upload", "lfuse")


def _build_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(f"workflow_gen.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


loggers = {name: _build_logger(name) for name in LOGGER_NAMES}
