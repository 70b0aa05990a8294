"""Core configuration, logging, database and error types"""

from .config import Settings, get_settings
from .database import create_db_engine, close_db
from .exceptions import StoreError, SerializationError, StorageError
from .interfaces import TokenInfo, ClientInfo
from .logging import setup_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "create_db_engine",
    "close_db",
    "StoreError",
    "SerializationError",
    "StorageError",
    "TokenInfo",
    "ClientInfo",
    "setup_logging",
    "get_logger",
]
