"""
Shared fixtures for store tests
"""
import time

import pytest
from sqlalchemy import create_engine, event

from oauth2_sqlstore.services.client_store import ClientStore
from oauth2_sqlstore.services.token_store import TokenStore


class FakeClock:
    """Settable epoch clock"""
    
    def __init__(self, now: float = None):
        self.now = now if now is not None else float(int(time.time()))
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def engine(tmp_path):
    """Create a file-backed SQLite engine usable from the sweeper thread"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'oauth2.db'}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    
    yield engine
    
    engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_store(engine, clock):
    """Token store whose sweeper never ticks during a test"""
    store = TokenStore(engine, "oauth2_token", gc_interval=3600, clock=clock)
    
    yield store
    
    store.close()


@pytest.fixture
def client_store(engine):
    return ClientStore(engine, "oauth2_client")


@pytest.fixture
def statements(engine):
    """Record every SQL statement sent to the database"""
    issued = []
    
    def record(conn, cursor, statement, parameters, context, executemany):
        issued.append(statement)
    
    event.listen(engine, "before_cursor_execute", record)
    
    yield issued
    
    event.remove(engine, "before_cursor_execute", record)
