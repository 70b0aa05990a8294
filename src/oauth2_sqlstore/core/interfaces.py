"""
Value abstractions the stores persist

Any pydantic model (or other object) exposing these accessors can be stored.
The stores only read the identifier, timestamp and TTL fields; everything
else travels inside the serialized payload.
"""
from datetime import datetime, timedelta
from typing import Optional, Protocol


class TokenInfo(Protocol):
    """Token value stored by TokenStore"""
    
    code: str
    code_create_at: Optional[datetime]
    code_expires_in: timedelta
    access: str
    access_create_at: Optional[datetime]
    access_expires_in: timedelta
    refresh: str
    refresh_create_at: Optional[datetime]
    refresh_expires_in: timedelta
    
    def model_dump_json(self) -> str:
        """Serialize the full token value"""
        ...


class ClientInfo(Protocol):
    """Client credential value stored by ClientStore"""
    
    id: str
    secret: str
    domain: str
    
    def model_dump_json(self) -> str:
        """Serialize the full client value"""
        ...
