"""Logging configuration for the resolver and its FDC traffic."""

import logging

LOGGER_NAME = "nutrition_resolver"
LOG_FORMAT = "%(asctime)s %(levelname)s [resolver] %(name)s: %(message)s"

# httpx logs each request URL at INFO, and FDC detail URLs carry the api_key.
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure resolver logging and keep HTTP client request logs quiet."""
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
