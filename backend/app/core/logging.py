import logging

from app.core.config import get_settings


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Create or reuse a module-level logger with a simple stream handler."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel((level or get_settings().log_level).upper())
    return logger
