import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

import anyio
from loguru import logger

from app.core.config import settings
from app.core.exceptions.rate_limiter import RateLimitConfigurationError
from app.core.types import RateLimitInfoDict


@dataclass
class RateLimitEntry:
    """Attempt counter for one client key"""

    count: int
    window_start: float


class LoginRateLimiter:
    """
    In-memory, per-process fixed-window counter for login attempts.

    Each client key (usually the client IP) gets one entry holding the number
    of attempts made since its window started. Every call to ``is_allowed``
    counts as an attempt, whatever the outcome of the login itself.

    1. No entry, or the window has elapsed: start a new window with count 1, allow
    2. Count already at ``max_attempts``: deny, entry untouched
    3. Otherwise: increment, allow

    Being a fixed window, a burst straddling a window boundary may get up to
    ``2 * max_attempts`` attempts through.

    A single lock guards the whole map; the read-check-update sequence of a
    call is one critical section so concurrent requests for the same key
    can never admit more than ``max_attempts``.

    Example:
        ```python
        limiter = LoginRateLimiter(max_attempts=5, window_seconds=900)

        if not limiter.is_allowed("192.168.1.1"):
            raise TooManyRequestsException(...)
        ```
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts <= 0:
            raise RateLimitConfigurationError("max attempts", max_attempts)
        if window_seconds <= 0:
            raise RateLimitConfigurationError("window", window_seconds)

        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _window_elapsed(self, entry: RateLimitEntry, now: float) -> bool:
        return now - entry.window_start > self.window_seconds

    def is_allowed(self, client_key: str) -> bool:
        """
        Record an attempt for ``client_key`` and decide whether it may proceed.

        Args:
            client_key: Client identifier, e.g. an IP address

        Returns:
            bool: True if the attempt is allowed, False if the client is blocked
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(client_key)

            if entry is None or self._window_elapsed(entry, now):
                self._entries[client_key] = RateLimitEntry(count=1, window_start=now)
                return True

            if entry.count >= self.max_attempts:
                return False

            entry.count += 1
            return True

    def get_entry(self, client_key: str) -> RateLimitEntry | None:
        """Snapshot of the entry for ``client_key``, for inspection only."""
        with self._lock:
            entry = self._entries.get(client_key)
            if entry is None:
                return None

            return RateLimitEntry(count=entry.count, window_start=entry.window_start)

    def retry_after(self, client_key: str) -> int:
        """
        Seconds until a blocked client may try again.

        Returns:
            int: 0 if the client is not currently blocked
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(client_key)

            if (
                entry is None
                or self._window_elapsed(entry, now)
                or entry.count < self.max_attempts
            ):
                return 0

            return max(1, math.ceil(entry.window_start + self.window_seconds - now))

    def get_limit_info(self, client_key: str) -> RateLimitInfoDict:
        return RateLimitInfoDict(
            limit=self.max_attempts,
            retry_after=self.retry_after(client_key),
            window=math.ceil(self.window_seconds),
        )

    def reset(self, client_key: str) -> bool:
        """
        Forget a client key, unblocking it.

        Returns:
            bool: True if an entry was removed
        """
        with self._lock:
            return self._entries.pop(client_key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def sweep(self) -> int:
        """
        Remove entries whose window has elapsed.

        Such entries would be reset on their next attempt anyway, so dropping
        them does not change any decision; it only bounds memory.

        Returns:
            int: Number of entries removed
        """
        with self._lock:
            now = self._clock()
            stale = [key for key, entry in self._entries.items() if self._window_elapsed(entry, now)]

            for key in stale:
                del self._entries[key]

            return len(stale)

    async def run_sweeper(self, interval: float) -> None:
        """
        Sweep stale entries every ``interval`` seconds until cancelled.

        Args:
            interval: Seconds between sweeps
        """
        if interval <= 0:
            raise RateLimitConfigurationError("sweep interval", interval)

        logger.info(f"Login rate limiter sweeper started, interval {interval}s")

        while True:
            await anyio.sleep(interval)
            removed = self.sweep()

            if removed:
                logger.debug(f"Rate limiter sweep removed {removed} stale entries")


login_rate_limiter = LoginRateLimiter(
    max_attempts=settings.login_rate_limit_attempts,
    window_seconds=settings.login_rate_limit_window,
)
