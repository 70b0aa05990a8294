"""
Logging configuration for the OAuth2 SQL store
"""
import logging
import sys
from typing import Optional, TextIO

from .config import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None, stream: Optional[TextIO] = None) -> None:
    """
    Configure store logging
    
    Args:
        settings: Settings to read level and format from (defaults to cached settings)
        stream: Diagnostic output stream (defaults to stderr)
    """
    settings = settings or get_settings()
    
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(stream or sys.stderr)
        ],
    )
    
    # Set third-party loggers to WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance with the specified name"""
    return logging.getLogger(name)
