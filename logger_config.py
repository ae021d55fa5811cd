"""Centralized logging configuration."""

import sys

from loguru import logger as loguru_logger

from config import LOG_LEVEL

log_format = ' | '.join(
    (
        '<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>',
        '<lvl>{level:<8}</>',
        '<c>{name}::{function}:{line}</>',
        '{message}',
    )
)

# Remove the default handler so records are not printed twice
loguru_logger.remove()
loguru_logger.add(sys.stderr, format=log_format, level=LOG_LEVEL)

logger = loguru_logger
