"""
Exceptions raised by the token and client stores
"""


class StoreError(Exception):
    """Base exception for store errors."""
    pass


class SerializationError(StoreError):
    """Raised when a token or client payload cannot be encoded or decoded."""
    pass


class StorageError(StoreError):
    """Raised when the backing database fails (connectivity, I/O, constraints)."""
    pass
