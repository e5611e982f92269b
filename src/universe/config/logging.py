"""Logging configuration using loguru."""

import sys

from loguru import logger


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure loguru for applications embedding the client.

    Args:
        log_level: Minimum log level to output
        json_logs: If True, output logs as JSON
    """
    logger.remove()

    if json_logs:
        logger.add(sys.stderr, format="{message}", level=log_level, serialize=True)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
                "<level>{message}</level>"
            ),
            level=log_level,
            colorize=True,
        )


def mask(token: str | None) -> str:
    """Shorten a token for log output."""
    if not token:
        return "<none>"

    return f"{token[:4]}..." if len(token) > 8 else "***"
