import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def create_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Create a named logger with a console handler.

    Args:
        name: Logger name, usually the module or component
        level: Logging level name (DEBUG, INFO, ...). Defaults to the configured node log level.

    Returns:
        Configured logger instance
    """
    if level is None:
        from docusign_node.config.settings import get_settings

        level = get_settings().log_level

    logger = logging.getLogger(f"docusign_node.{name}")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
