"""
Token Store - Database operations for OAuth2 token records
"""
import logging
import time
from typing import Callable, Optional, Type

from pydantic import BaseModel
from sqlalchemy import MetaData, and_, delete, func, insert, or_, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..core.database import ensure_table, session_scope
from ..core.exceptions import SerializationError
from ..core.interfaces import TokenInfo
from ..core.logging import get_logger
from ..models.database import build_token_table
from ..models.schemas import Token
from .expiry import compute_expires_at
from .sweeper import DEFAULT_GC_INTERVAL, TokenSweeper

IDENTIFIER_FIELDS = ("code", "access", "refresh")


class TokenStore:
    """
    SQL token store

    Every record can be looked up by its authorization code, access token or
    refresh token. Revoking one of them blanks that field only; the row is
    physically removed later by the background sweeper once it has expired
    or has no live identifiers left.
    """

    def __init__(
        self,
        engine: Engine,
        table_name: str = "oauth2_token",
        gc_interval: Optional[float] = DEFAULT_GC_INTERVAL,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.time,
        token_model: Type[BaseModel] = Token,
        join_timeout: Optional[float] = 5.0,
    ):
        """
        Initialize the token store and start its sweeper

        Args:
            engine: SQLAlchemy engine shared with other stores
            table_name: Token table name (created if missing)
            gc_interval: Seconds between sweeps; values <= 0 mean 600
            logger: Diagnostic sink (defaults to this module's logger)
            clock: Returns the current epoch time in seconds
            token_model: Pydantic model the payload is decoded into
            join_timeout: Seconds close() waits for an in-flight sweep

        Raises:
            StorageError: If the token table cannot be created
        """
        self.engine = engine
        self.table_name = table_name
        self.logger = logger or get_logger(__name__)
        self.clock = clock
        self.token_model = token_model
        self.table = build_token_table(table_name, MetaData())
        self._session_factory = sessionmaker(autoflush=False, bind=engine)

        ensure_table(engine, self.table)

        self._sweeper = TokenSweeper(self, gc_interval, join_timeout)
        self._sweeper.start()

    def set_logger(self, logger: logging.Logger) -> "TokenStore":
        """Replace the diagnostic sink"""
        self.logger = logger
        return self

    @property
    def gc_interval(self) -> float:
        return self._sweeper.interval

    @property
    def gc_running(self) -> bool:
        return self._sweeper.running

    def close(self) -> None:
        """Stop the background sweeper"""
        self._sweeper.stop()

    def __enter__(self) -> "TokenStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def create(self, info: TokenInfo) -> None:
        """
        Store a new token record

        A token carrying an authorization code is indexed by its code only;
        otherwise it is indexed by its access and (optional) refresh token.

        Args:
            info: Token value to store

        Raises:
            SerializationError: If the token cannot be encoded
            StorageError: If the insert fails
        """
        try:
            data = info.model_dump_json()
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to encode token: {e}") from e

        values = {
            "expired_at": compute_expires_at(info),
            "code": "",
            "access": "",
            "refresh": "",
            "data": data,
        }
        if info.code:
            values["code"] = info.code
        else:
            values["access"] = info.access or ""
            values["refresh"] = info.refresh or ""
        values["live_keys"] = sum(1 for field in IDENTIFIER_FIELDS if values[field])

        with session_scope(self._session_factory) as db:
            db.execute(insert(self.table).values(**values))
            db.commit()

        self.logger.debug(
            f"Stored token for client_id={getattr(info, 'client_id', '')} "
            f"(expired_at={values['expired_at']})"
        )

    def get_by_code(self, code: str) -> Optional[BaseModel]:
        """Get token information by authorization code"""
        return self._get_by("code", code)

    def get_by_access(self, access: str) -> Optional[BaseModel]:
        """Get token information by access token"""
        return self._get_by("access", access)

    def get_by_refresh(self, refresh: str) -> Optional[BaseModel]:
        """Get token information by refresh token"""
        return self._get_by("refresh", refresh)

    def remove_by_code(self, code: str) -> None:
        """Revoke an authorization code"""
        self._remove_by("code", code)

    def remove_by_access(self, access: str) -> None:
        """Revoke an access token"""
        self._remove_by("access", access)

    def remove_by_refresh(self, refresh: str) -> None:
        """Revoke a refresh token"""
        self._remove_by("refresh", refresh)

    def sweep(self) -> int:
        """
        Delete expired and fully revoked records

        Returns:
            Number of records deleted

        Raises:
            StorageError: If counting or deleting fails
        """
        predicate = self._reclaimable(int(self.clock()))

        with session_scope(self._session_factory) as db:
            count = db.execute(
                select(func.count()).select_from(self.table).where(predicate)
            ).scalar_one()

        if count == 0:
            return 0

        # Hard delete; the predicate is evaluated again by the database
        with session_scope(self._session_factory) as db:
            deleted = db.execute(delete(self.table).where(predicate)).rowcount
            db.commit()

        self.logger.info(f"Swept {deleted} token records from {self.table_name}")
        return deleted

    def _reclaimable(self, now: int):
        columns = self.table.c
        return or_(
            columns.expired_at <= now,
            columns.live_keys <= 0,
            and_(columns.code == "", columns.access == "", columns.refresh == ""),
        )

    def _get_by(self, field: str, key: str) -> Optional[BaseModel]:
        if not key:
            return None

        with session_scope(self._session_factory) as db:
            data = db.execute(
                select(self.table.c.data).where(self.table.c[field] == key).limit(1)
            ).scalars().first()

        if data is None:
            return None

        return self._to_token_info(data)

    def _remove_by(self, field: str, key: str) -> None:
        if not key:
            return

        column = self.table.c[field]
        with session_scope(self._session_factory) as db:
            result = db.execute(
                update(self.table)
                .where(column == key)
                .values({field: "", "live_keys": self.table.c.live_keys - 1})
            )
            db.commit()

        if result.rowcount:
            self.logger.debug(f"Revoked {field} on {result.rowcount} token record(s)")

    def _to_token_info(self, data: str) -> BaseModel:
        try:
            return self.token_model.model_validate_json(data)
        except ValueError as e:
            raise SerializationError(f"failed to decode token payload: {e}") from e
