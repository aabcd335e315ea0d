"""
Logging setup shared by every engine module.

Loggers write to stdout, and additionally to LOG_FILE when it is configured.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _add_handler(logger: logging.Logger, handler: logging.Handler, level: int):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logger(
    name: str = "interviewcoach",
    log_level: str = LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = LOG_FILE
) -> logging.Logger:
    """
    Get a configured logger for an engine module.
    
    Calling it again with the same name returns the existing logger without
    adding handlers twice.
    
    Args:
        name: Logger name, usually the module's short name
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Extra file destination. Default: LOG_FILE from config
        
    Example:
        >>> logger = setup_logger("session_manager")
        >>> logger.info("Created interview session")
    """
    logger = logging.getLogger(name)
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)
    
    if logger.handlers:
        return logger
    
    _add_handler(logger, logging.StreamHandler(sys.stdout), level)
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _add_handler(logger, logging.FileHandler(log_path, mode='a', encoding='utf-8'), level)
    
    return logger
