"""
Factory for building the stores from settings
"""
from typing import Optional, Tuple

from sqlalchemy.engine import Engine

from .core.config import Settings, get_settings
from .core.database import close_db, create_db_engine
from .services.client_store import ClientStore
from .services.token_store import TokenStore


def create_stores(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
) -> Tuple[TokenStore, ClientStore]:
    """
    Create a token store and a client store sharing one engine

    Args:
        settings: Store settings (defaults to cached settings)
        engine: Existing engine to reuse instead of building one from DATABASE_URL

    Returns:
        (token store, client store); the token store's sweeper is already running
    """
    settings = settings or get_settings()
    owns_engine = engine is None
    if owns_engine:
        engine = create_db_engine(settings)

    try:
        client_store = ClientStore(engine, settings.CLIENT_TABLE)
        token_store = TokenStore(engine, settings.TOKEN_TABLE, gc_interval=settings.GC_INTERVAL)
    except Exception:
        if owns_engine:
            close_db(engine)
        raise

    return token_store, client_store
