"""
Client Store - Database operations for OAuth2 client credentials
"""
import logging
from typing import Optional, Type

from pydantic import BaseModel
from sqlalchemy import MetaData, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..core.database import ensure_table, session_scope
from ..core.exceptions import SerializationError
from ..core.interfaces import ClientInfo
from ..core.logging import get_logger
from ..models.database import build_client_table
from ..models.schemas import Client


class ClientStore:
    """SQL client store; clients are immutable once created and never expire"""

    def __init__(
        self,
        engine: Engine,
        table_name: str = "oauth2_client",
        logger: Optional[logging.Logger] = None,
        client_model: Type[BaseModel] = Client,
    ):
        self.engine = engine
        self.table_name = table_name
        self.logger = logger or get_logger(__name__)
        self.client_model = client_model
        self.table = build_client_table(table_name, MetaData())
        self._session_factory = sessionmaker(autoflush=False, bind=engine)

        ensure_table(engine, self.table)

    def set_logger(self, logger: logging.Logger) -> "ClientStore":
        """Replace the diagnostic sink"""
        self.logger = logger
        return self

    def get_by_id(self, id: str) -> Optional[BaseModel]:
        """
        Get client information by client id

        Args:
            id: OAuth client id

        Returns:
            Client information, or None for an empty id or unknown client

        Raises:
            SerializationError: If the stored payload cannot be decoded
            StorageError: If the query fails
        """
        if not id:
            return None

        with session_scope(self._session_factory) as db:
            data = db.execute(
                select(self.table.c.data).where(self.table.c.id == id).limit(1)
            ).scalars().first()

        if data is None:
            return None

        try:
            return self.client_model.model_validate_json(data)
        except ValueError as e:
            raise SerializationError(f"failed to decode client payload: {e}") from e

    def create(self, info: ClientInfo) -> None:
        """
        Register a new client

        Raises:
            SerializationError: If the client cannot be encoded
            StorageError: If the insert fails (including a duplicate id)
        """
        try:
            data = info.model_dump_json()
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to encode client: {e}") from e

        with session_scope(self._session_factory) as db:
            db.execute(
                insert(self.table).values(
                    id=info.id,
                    secret=info.secret or "",
                    domain=info.domain or "",
                    data=data,
                )
            )
            db.commit()

        self.logger.info(f"Created new client: {info.id}")
