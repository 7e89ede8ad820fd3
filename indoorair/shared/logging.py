"""Logging configuration utilities."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# aiohttp logs every connection at DEBUG, asyncio warns about slow callbacks
NOISY_LOGGERS = ("aiohttp", "asyncio")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger for an indoor air process.

    Unknown level names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
