import threading
import time
from collections.abc import Callable

from artapi.logging.logger import Log
from artapi.ratelimit.base import BaseRateLimiter


class RateLimiter(BaseRateLimiter):
    """Per-identity cooldown: one allowed submission per window.

    Identities whose last allowed submission is older than the retention
    period are purged by a background sweep thread, started at construction
    and ended by stop().
    """

    RETENTION_MULTIPLIER = 5

    def __init__(
        self,
        window_seconds: float = 60.0,
        *,
        retention_seconds: float | None = None,
        sweep_interval_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        start_sweeper: bool = True,
    ) -> None:
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self._window = window_seconds
        self._retention = (
            retention_seconds
            if retention_seconds is not None
            else window_seconds * self.RETENTION_MULTIPLIER
        )
        self._sweep_interval = sweep_interval_seconds or self._retention
        self._clock = clock
        self._lock = threading.Lock()
        self._last_allowed: dict[str, float] = {}
        self._stop_event = threading.Event()
        self._sweeper: threading.Thread | None = None
        if start_sweeper:
            self.start()

    def allow(self, identity: str) -> bool:
        now = self._clock()
        with self._lock:
            last = self._last_allowed.get(identity)
            if last is not None and now - last < self._window:
                return False
            self._last_allowed[identity] = now
            return True

    def sweep(self) -> int:
        """Drop identities idle for longer than the retention period. Returns the count."""
        now = self._clock()
        with self._lock:
            expired = [
                identity
                for identity, last in self._last_allowed.items()
                if now - last > self._retention
            ]
            for identity in expired:
                del self._last_allowed[identity]
        if expired:
            Log.debug(f"Rate limiter purged {len(expired)} identities")
        return len(expired)

    def tracked_identities(self) -> int:
        with self._lock:
            return len(self._last_allowed)

    def start(self) -> None:
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(
            target=self._run_sweeper,
            name="rate-limiter-sweep",
            daemon=True,
        )
        self._sweeper.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=5)
            self._sweeper = None

    def _run_sweeper(self) -> None:
        while not self._stop_event.wait(self._sweep_interval):
            self.sweep()
