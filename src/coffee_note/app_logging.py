"""Logging configuration helpers."""

import logging

_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"

# supabase performs every query through httpx, which logs each request at INFO
_QUIET_LOGGERS = ("httpx", "hpack")


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the coffee_note logger and return it.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger("coffee_note")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger
