"""Logging configuration for the relay service."""

import logging


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure basic logging and return the package logger."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # httpx logs every request URL at INFO, and Telegram URLs embed the bot token.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger("quiz_relay")
