"""
Expiry policy for stored token records
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..core.interfaces import TokenInfo

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _deadline(created_at: Optional[datetime], expires_in: Optional[timedelta]) -> int:
    """Absolute deadline in epoch seconds; a missing timestamp counts as the epoch"""
    if created_at is None:
        created_at = EPOCH
    elif created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    
    return int((created_at + (expires_in or timedelta(0))).timestamp())


def compute_expires_at(token: TokenInfo) -> int:
    """
    Compute the absolute expiry of a token record
    
    The authorization code governs a code grant. Otherwise the access token
    sets the expiry, and a refresh token, when present, always overrides it
    whether its TTL is shorter or longer.
    
    Args:
        token: Token value being stored
        
    Returns:
        Expiry as epoch seconds
    """
    if token.code:
        return _deadline(token.code_create_at, token.code_expires_in)
    
    expires_at = _deadline(token.access_create_at, token.access_expires_in)
    if token.refresh:
        expires_at = _deadline(token.refresh_create_at, token.refresh_expires_in)
    
    return expires_at
