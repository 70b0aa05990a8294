"""
Database engine construction, table provisioning and session handling
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Table, create_engine, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .config import Settings, get_settings
from .exceptions import StorageError
from .logging import get_logger

logger = get_logger(__name__)


def create_db_engine(settings: Optional[Settings] = None) -> Engine:
    """
    Create the SQLAlchemy engine shared by the token and client stores

    Args:
        settings: Settings to build the engine from (defaults to cached settings)

    Returns:
        SQLAlchemy engine
    """
    settings = settings or get_settings()
    url = make_url(settings.DATABASE_URL)

    kwargs = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,  # Enable connection health checks
    }
    if url.get_backend_name() == "sqlite":
        # The sweeper thread shares connections with foreground callers
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = settings.DB_POOL_SIZE
        kwargs["max_overflow"] = settings.DB_MAX_OVERFLOW

    logger.info(
        f"{settings.APP_NAME} v{settings.APP_VERSION}: creating database engine for "
        f"{url.render_as_string(hide_password=True)}"
    )
    return create_engine(url, **kwargs)


def close_db(engine: Engine) -> None:
    """Close database connections"""
    logger.info("Closing database connections...")
    engine.dispose()
    logger.info("Database connections closed")


def ensure_table(engine: Engine, table: Table) -> None:
    """
    Create a table from its definition unless it already exists

    An existing table must carry every column of the definition.

    Raises:
        StorageError: If the table cannot be inspected or created, or an
            existing table is missing columns
    """
    try:
        inspector = inspect(engine)
        if not inspector.has_table(table.name):
            logger.info(f"Creating table {table.name}")
            table.create(engine, checkfirst=True)
            return
        existing = {column["name"] for column in inspector.get_columns(table.name)}
    except SQLAlchemyError as e:
        logger.error(f"Failed to create table {table.name}: {str(e)}")
        raise StorageError(f"failed to create table {table.name}: {e}") from e

    missing = [column.name for column in table.columns if column.name not in existing]
    if missing:
        logger.error(f"Table {table.name} is missing columns: {', '.join(missing)}")
        raise StorageError(f"table {table.name} is missing columns: {', '.join(missing)}")


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Open a short-lived session and translate database faults

    Yields:
        SQLAlchemy database session

    Raises:
        StorageError: On any SQLAlchemy error raised inside the block
    """
    db = session_factory()
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(str(e)) from e
    finally:
        db.close()
