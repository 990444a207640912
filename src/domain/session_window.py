"""
Session Window

Bounded queue over an account's session records. Records are kept newest
first; pushing past capacity evicts according to the configured policy.
"""

from collections import deque
from datetime import datetime
from typing import Iterable, List, Optional

from src.domain.base import utcnow
from src.domain.entities import SessionEviction, SessionRecord


class SessionWindow:
    """
    Bounded, newest-first collection of session records.

    Eviction policies:
    - recency: drop the oldest records whatever their state
    - inactive_first: drop the oldest revoked/expired record while one exists,
      then fall back to the oldest record
    """

    def __init__(
        self,
        records: Iterable[SessionRecord],
        capacity: int,
        eviction: SessionEviction = SessionEviction.inactive_first,
    ):
        if capacity < 1:
            raise ValueError("Session window capacity must be at least 1")
        self.capacity = capacity
        self.eviction = eviction
        self._records = deque(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    @property
    def records(self) -> List[SessionRecord]:
        return list(self._records)

    def push(
        self, record: SessionRecord, now: Optional[datetime] = None
    ) -> List[SessionRecord]:
        """Add a new record at the front and return whatever got evicted."""
        now = now or utcnow()
        self._records.appendleft(record)

        evicted = []
        while len(self._records) > self.capacity:
            evicted.append(self._evict_one(now))
        return evicted

    def _evict_one(self, now: datetime) -> SessionRecord:
        if self.eviction == SessionEviction.inactive_first:
            # Scan from the oldest end; never evict the record just pushed
            for index in range(len(self._records) - 1, 0, -1):
                candidate = self._records[index]
                if not candidate.is_active(now):
                    del self._records[index]
                    return candidate
        return self._records.pop()
