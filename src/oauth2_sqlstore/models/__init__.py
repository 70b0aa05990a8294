"""Table definitions and payload models"""

from .database import build_token_table, build_client_table
from .schemas import Token, Client

__all__ = [
    "build_token_table",
    "build_client_table",
    "Token",
    "Client",
]
