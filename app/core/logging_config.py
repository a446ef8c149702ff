"""
Logging setup.

Configures the root logger once at application start: a console handler
and, when ``LOG_FILE`` is set, a rotating file handler.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_SIMPLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file

    Returns:
        The configured ``app`` logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("app")
    logger.setLevel(log_level)

    # Already configured (e.g. uvicorn reload)
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_SIMPLE_FORMAT))
    console_handler.setLevel(log_level)
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=10485760,  # 10MB
                                           backupCount=5)
        file_handler.setFormatter(logging.Formatter(_DETAILED_FORMAT))
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
