"""Structured logging utilities."""
import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from rowmarkers.core.config import LOG_LEVEL

LOGGER_NAME = "rowmarkers"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a JSON line handler to the package logger.
    
    Args:
        level: Log level name, defaults to LOG_LEVEL from the environment
        
    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper()))
    
    # Records are already JSON, so the handler prints the message only
    if not any(getattr(h, "_rowmarkers", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._rowmarkers = True
        logger.addHandler(handler)
    
    return logger


def log_structured(level: str, message: str, **kwargs):
    """
    Log structured JSON message.
    
    Args:
        level: Log level (debug, info, warning, error, etc.)
        message: Log message
        **kwargs: Additional structured fields
    """
    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level.upper(),
        "message": message,
        **kwargs
    }
    
    logger = logging.getLogger(LOGGER_NAME)
    getattr(logger, level.lower(), logger.info)(json.dumps(log_entry, default=str))


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None):
    """
    Log an exception with its type, message and traceback.
    
    Args:
        error: The exception being reported
        context: Extra fields identifying where it happened
    """
    log_structured(
        "error",
        str(error),
        error_type=type(error).__name__,
        traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
        **(context or {})
    )
