"""Logging configuration helpers."""

import logging

_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with a single stream handler."""
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logger = logging.getLogger("zola_studio")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
