"""Token and client stores"""

from .client_store import ClientStore
from .expiry import compute_expires_at
from .sweeper import DEFAULT_GC_INTERVAL, TokenSweeper
from .token_store import TokenStore

__all__ = [
    "ClientStore",
    "TokenStore",
    "TokenSweeper",
    "DEFAULT_GC_INTERVAL",
    "compute_expires_at",
]
