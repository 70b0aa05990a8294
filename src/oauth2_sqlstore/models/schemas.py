"""
Pydantic models for the token and client payloads
"""
from datetime import datetime, timedelta
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Token(BaseModel):
    """Token information issued by an OAuth2 server"""
    client_id: str = ""
    user_id: str = ""
    redirect_uri: str = ""
    scope: str = ""
    
    # Authorization code grant
    code: str = ""
    code_challenge: str = ""
    code_challenge_method: str = ""
    code_create_at: Optional[datetime] = None
    code_expires_in: timedelta = Field(default=timedelta(0))
    
    # Token grant
    access: str = ""
    access_create_at: Optional[datetime] = None
    access_expires_in: timedelta = Field(default=timedelta(0))
    refresh: str = ""
    refresh_create_at: Optional[datetime] = None
    refresh_expires_in: timedelta = Field(default=timedelta(0))
    
    model_config = ConfigDict(extra="ignore")


class Client(BaseModel):
    """Client credentials registered with an OAuth2 server"""
    id: str = Field(..., min_length=1, max_length=255)
    secret: str = Field("", max_length=512)
    domain: str = Field("", max_length=512)
    public: bool = False
    user_id: str = ""
    
    model_config = ConfigDict(extra="ignore")
