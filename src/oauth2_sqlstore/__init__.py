"""
OAuth2 SQL Store

SQLAlchemy-backed persistence for OAuth2 authorization codes, access and
refresh tokens, and client credentials.
"""

from .core import (
    Settings,
    get_settings,
    create_db_engine,
    close_db,
    setup_logging,
    StoreError,
    SerializationError,
    StorageError,
    TokenInfo,
    ClientInfo,
)
from .models import Token, Client
from .services import (
    TokenStore,
    ClientStore,
    TokenSweeper,
    DEFAULT_GC_INTERVAL,
    compute_expires_at,
)
from .factory import create_stores

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "create_db_engine",
    "close_db",
    "setup_logging",
    
    # Errors
    "StoreError",
    "SerializationError",
    "StorageError",
    
    # Values
    "TokenInfo",
    "ClientInfo",
    "Token",
    "Client",
    
    # Stores
    "TokenStore",
    "ClientStore",
    "TokenSweeper",
    "DEFAULT_GC_INTERVAL",
    "compute_expires_at",
    "create_stores",
]

__version__ = "1.0.0"
