"""
Tests for the background token sweeper
"""
import logging
import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from oauth2_sqlstore.core.exceptions import StorageError
from oauth2_sqlstore.models.schemas import Token
from oauth2_sqlstore.services.sweeper import DEFAULT_GC_INTERVAL, TokenSweeper
from oauth2_sqlstore.services.token_store import TokenStore


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


@pytest.fixture
def fast_store(engine, clock):
    """Token store ticking every 50ms"""
    store = TokenStore(engine, "oauth2_token", gc_interval=0.05, clock=clock)
    
    yield store
    
    store.close()


class TestInterval:
    """Test interval normalization"""
    
    @pytest.mark.parametrize("interval", [0, -5, None])
    def test_non_positive_interval_uses_default(self, engine, interval):
        with TokenStore(engine, "oauth2_token", gc_interval=interval) as store:
            assert store.gc_interval == DEFAULT_GC_INTERVAL
    
    def test_positive_interval_is_kept(self, engine):
        with TokenStore(engine, "oauth2_token", gc_interval=30) as store:
            assert store.gc_interval == 30


class TestBackgroundSweep:
    """Test the sweeper thread"""
    
    def test_expired_token_is_reclaimed_in_background(self, fast_store, clock):
        now = datetime.fromtimestamp(int(clock()), tz=timezone.utc)
        fast_store.create(
            Token(access="A1", access_create_at=now, access_expires_in=timedelta(seconds=3600))
        )
        
        clock.advance(3601)
        
        assert wait_for(lambda: fast_store.get_by_access("A1") is None)
    
    def test_failed_tick_does_not_stop_sweeper(self, fast_store, caplog):
        calls = []
        recovered = threading.Event()
        
        def flaky_sweep():
            calls.append(1)
            if len(calls) == 1:
                raise StorageError("database is locked")
            recovered.set()
            return 0
        
        fast_store.sweep = flaky_sweep
        
        with caplog.at_level(logging.ERROR):
            assert recovered.wait(5.0)
        
        assert fast_store.gc_running is True
        assert "database is locked" in caplog.text
    
    def test_failed_tick_is_reported_to_custom_logger(self, fast_store, caplog):
        sink = logging.getLogger("tests.sweeper.sink")
        fast_store.set_logger(sink)
        failed = threading.Event()
        
        def broken_sweep():
            failed.set()
            raise StorageError("no such table")
        
        fast_store.sweep = broken_sweep
        
        with caplog.at_level(logging.ERROR, logger="tests.sweeper.sink"):
            assert failed.wait(5.0)
            assert wait_for(lambda: "no such table" in caplog.text)
        
        assert any(record.name == "tests.sweeper.sink" for record in caplog.records)
    
    def test_no_ticks_after_close(self, fast_store):
        calls = []
        fast_store.sweep = lambda: calls.append(1) or 0
        assert wait_for(lambda: len(calls) > 0)
        
        fast_store.close()
        settled = len(calls)
        time.sleep(0.2)
        
        assert len(calls) == settled
        assert fast_store.gc_running is False


class TestSweeperLifecycle:
    """Test start/stop semantics"""
    
    def test_start_is_once_only(self, token_store):
        sweeper = TokenSweeper(token_store, interval=3600)
        sweeper.start()
        sweeper.start()
        
        assert sweeper.running is True
        
        sweeper.stop()
        sweeper.start()
        
        assert sweeper.running is False
    
    def test_stop_before_start(self, token_store):
        sweeper = TokenSweeper(token_store, interval=3600)
        
        sweeper.stop()
        
        assert sweeper.running is False
