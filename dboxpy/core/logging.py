"""Logging utilities for dboxpy modules."""

import logging

PACKAGE_LOGGERS = (
    'dboxpy',
    'dboxpy.api',
    'dboxpy.auth',
    'dboxpy.keychain',
    'dboxpy.upload',
    'dboxpy.upload.orchestrator',
    'dboxpy.upload.parts',
    'dboxpy.upload.file',
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers

    Args:
        name: Logger name (typically 'dboxpy.<area>')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    # basicConfig() not called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def configure_package_loggers(level: int) -> None:
    """Set the level on every dboxpy logger and keep propagation on."""
    for logger_name in PACKAGE_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True
