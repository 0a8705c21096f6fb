# sdk/cache.py
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

from .models import Product


@dataclass(frozen=True)
class CacheEntry:
    """Last good product list and when it was fetched."""

    data: Tuple[Product, ...]
    fetched_at: float
    # wall clock, for display only; validity is judged on fetched_at
    fetched_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class CacheStore:
    """
    Holds at most one CacheEntry.

    Entries are only ever replaced whole, so readers see either the old or
    the new snapshot. The lock keeps that true when a store is shared
    across threads.
    """

    def __init__(self) -> None:
        self._entry: Optional[CacheEntry] = None
        self._lock = threading.Lock()

    def read(self) -> Optional[CacheEntry]:
        with self._lock:
            return self._entry

    def write(self, entry: CacheEntry) -> None:
        with self._lock:
            self._entry = entry

    def is_valid(self, now: float, duration: float) -> bool:
        entry = self.read()
        return entry is not None and now - entry.fetched_at < duration

    def age(self, now: float) -> Optional[float]:
        entry = self.read()
        if entry is None:
            return None
        return now - entry.fetched_at
