"""
Background garbage collection for token records
"""
import threading
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .token_store import TokenStore

DEFAULT_GC_INTERVAL = 600


class TokenSweeper:
    """
    Periodically deletes expired or fully revoked token records

    The worker runs on a daemon thread and owns the stop signal. A failed
    tick is reported through the store's logger and the next tick runs as
    scheduled; only stop() ends the loop.
    """

    def __init__(
        self,
        store: "TokenStore",
        interval: Optional[float] = DEFAULT_GC_INTERVAL,
        join_timeout: Optional[float] = 5.0,
    ):
        """
        Initialize the sweeper

        Args:
            store: Token store whose table is swept
            interval: Seconds between ticks; values <= 0 fall back to the default
            join_timeout: Seconds stop() waits for an in-flight tick
        """
        self.store = store
        self.interval = interval if interval and interval > 0 else DEFAULT_GC_INTERVAL
        self.join_timeout = join_timeout
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            name=f"token-sweeper-{store.table_name}",
            daemon=True,
        )

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        """Start ticking; a sweeper can be started only once"""
        if self._thread.is_alive() or self._stop_event.is_set():
            return
        self._thread.start()
        self.store.logger.info(
            f"Started token sweeper for {self.store.table_name} (interval={self.interval}s)"
        )

    def stop(self) -> None:
        """Halt future ticks; an in-flight tick runs to completion"""
        if self._stop_event.is_set():
            return
        self._stop_event.set()

        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(self.join_timeout)
        self.store.logger.info(f"Stopped token sweeper for {self.store.table_name}")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self._tick()

    def _tick(self) -> None:
        try:
            self.store.sweep()
        except Exception as e:
            self.store.logger.error(f"Token sweep of {self.store.table_name} failed: {e}")
