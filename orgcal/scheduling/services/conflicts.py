"""Detection of scheduling conflicts between meetings."""

from datetime import datetime
from typing import Iterable, List, Optional, Protocol, TypeVar

from sqlalchemy.orm import Session

from orgcal.scheduling.models import Meeting
from orgcal.scheduling.models.base import as_utc
from orgcal.scheduling.services.interval_store import IntervalStore


class TimeRange(Protocol):
    start_time: datetime
    end_time: datetime


R = TypeVar("R", bound=TimeRange)


def intervals_overlap(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime
) -> bool:
    """Half-open overlap test: [a) and [b) overlap iff start_a < end_b and start_b < end_a.

    Back-to-back ranges (one ending exactly when the other starts) do not overlap.
    """
    return as_utc(start_a) < as_utc(end_b) and as_utc(start_b) < as_utc(end_a)


def find_conflicts_in(
    candidate_start: datetime, candidate_end: datetime, intervals: Iterable[R]
) -> List[R]:
    """Return the intervals that overlap the candidate range."""
    return [
        interval
        for interval in intervals
        if intervals_overlap(
            candidate_start, candidate_end, interval.start_time, interval.end_time
        )
    ]


class ConflictDetector:
    """Answers whether a candidate range collides with a calendar's scheduled meetings.

    The overlap predicate runs in the database (see IntervalStore.find_overlapping)
    using the same half-open rule as intervals_overlap.
    """

    def __init__(self, store: IntervalStore) -> None:
        self._store = store

    def has_conflict(
        self,
        calendar_id: int,
        start: datetime,
        end: datetime,
        session: Optional[Session] = None,
    ) -> bool:
        return bool(
            self._store.find_overlapping(
                calendar_id, start, end, limit=1, session=session
            )
        )

    def first_conflict(
        self,
        calendar_id: int,
        start: datetime,
        end: datetime,
        session: Optional[Session] = None,
    ) -> Optional[Meeting]:
        conflicts = self._store.find_overlapping(
            calendar_id, start, end, limit=1, session=session
        )
        return conflicts[0] if conflicts else None

    def find_conflicts(
        self,
        calendar_id: int,
        start: datetime,
        end: datetime,
        session: Optional[Session] = None,
    ) -> List[Meeting]:
        return self._store.find_overlapping(calendar_id, start, end, session=session)
