import threading
import weakref
from contextlib import contextmanager
from typing import Generator, Hashable, Optional

from orgcal.common.http_errors import ErrorCode, ServiceError
from orgcal.common.logging_config import get_logger

logger = get_logger(__name__)


class CalendarLockRegistry:
    """One mutual-exclusion lock per calendar, created on first use.

    Entries are weak: a lock lives only while some caller holds or waits on it,
    so the registry stays as small as the set of calendars being booked.
    """

    def __init__(self, timeout_seconds: Optional[float] = 10.0) -> None:
        self._timeout = timeout_seconds
        self._locks: "weakref.WeakValueDictionary[Hashable, threading.Lock]" = (
            weakref.WeakValueDictionary()
        )
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Generator[None, None, None]:
        """Hold the lock for ``key``; waits at most the configured timeout."""
        lock = self._lock_for(key)
        timeout = -1 if self._timeout is None else self._timeout
        if not lock.acquire(timeout=timeout):
            logger.warning("Timed out waiting for calendar lock", calendar_id=key)
            raise ServiceError(
                "Calendar is busy, try again",
                code=ErrorCode.SERVICE_UNAVAILABLE,
                details={"calendar_id": key},
                status_code=503,
            )
        try:
            yield
        finally:
            lock.release()
