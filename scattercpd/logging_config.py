"""
Logging configuration.

Library modules log through ``logging.getLogger(__name__)``; applications call
``setup_logging`` once to attach handlers to the package logger.
"""

import logging
import logging.handlers
from typing import Optional

from .config import Config, config


def setup_logging(logger_name: str = "scattercpd", settings: Optional[Config] = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        logger_name: Name of the logger (the package name by default)
        settings: Configuration to read levels and the log file from

    Returns:
        Configured logger instance
    """
    settings = settings or config
    logger = logging.getLogger(logger_name)

    # Don't add handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            settings.log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(settings.log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
