"""Centralized logging configuration using loguru.

Library modules log through a component-bound logger so every record says
which part of the image layer produced it (cache, coordinator, transport...).
Handlers are only installed by ``setup_logging``; an application embedding
the library without calling it keeps its own loguru configuration.

Example:
    from pictora_images.logging import get_logger, setup_logging

    setup_logging(level="DEBUG")
    log = get_logger("cache")
    log.debug("Added to image cache: {}", url)

"""

import sys
from typing import Any

from loguru import logger

DEFAULT_COMPONENT = "app"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[component]: <11}</magenta> | "
    "<level>{message}</level>"
)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: str | None = None,
) -> Any:
    """Configure loguru for the image layer.

    Should be called once at application startup.

    Args:
        level: Minimum log level to capture. One of: DEBUG, INFO, WARNING, ERROR, CRITICAL.
        json_output: If True, output logs in JSON format for production/monitoring systems.
        log_file: Optional file path to write logs to. If None, logs only to stderr.

    Returns:
        The configured loguru logger instance.

    """
    logger.remove()
    # Records from the bare loguru logger still need a component
    logger.configure(extra={"component": DEFAULT_COMPONENT})

    if json_output:
        logger.add(sys.stderr, format="{message}", serialize=True, level=level)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        logger.add(
            log_file,
            format=CONSOLE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
        )

    return logger


def get_logger(component: str = DEFAULT_COMPONENT) -> Any:
    """Return a logger bound to an image-layer component.

    Args:
        component: Short component name shown in every record.

    Returns:
        A loguru logger carrying ``component`` in its extra context.

    """
    return logger.bind(component=component)
