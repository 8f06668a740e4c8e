"""
Scheduling service for personal calendars.

The only entry point that mutates calendar state. Booking validates its
input, then runs the conflict check and the insert as one critical section
per calendar: an in-process lock keyed by calendar id plus a row lock on the
calendar inside the same database transaction as the insert.
"""

from datetime import datetime
from typing import List, Optional

from orgcal.common.http_errors import ConflictError, NotFoundError, ValidationError
from orgcal.common.logging_config import get_logger
from orgcal.scheduling.models import Meeting
from orgcal.scheduling.models.base import as_utc
from orgcal.scheduling.services.audit_logger import AuditLogger, audit_logger
from orgcal.scheduling.services.conflicts import ConflictDetector
from orgcal.scheduling.services.interval_store import (
    IntervalStore,
    validate_interval,
)
from orgcal.scheduling.services.locks import CalendarLockRegistry

logger = get_logger(__name__)


def require_identifier(value: Optional[str], field: str) -> str:
    """Identifiers are mandatory; there is no default identity."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    return str(value).strip()


def describe_meeting(meeting: Meeting) -> dict:
    return {
        "id": meeting.id,
        "title": meeting.title,
        "start_time": meeting.start_time.isoformat(),
        "end_time": meeting.end_time.isoformat(),
    }


class SchedulingService:
    """Service class for booking, listing and cancelling meetings."""

    def __init__(
        self,
        store: IntervalStore,
        detector: Optional[ConflictDetector] = None,
        locks: Optional[CalendarLockRegistry] = None,
        audit: Optional[AuditLogger] = None,
    ) -> None:
        self._store = store
        self._detector = detector or ConflictDetector(store)
        self._locks = locks or CalendarLockRegistry()
        self._audit = audit or audit_logger

    @property
    def store(self) -> IntervalStore:
        return self._store

    def book_meeting(
        self,
        owner_id: str,
        title: str,
        start: datetime,
        end: datetime,
        creator_id: str,
        description: Optional[str] = None,
    ) -> Meeting:
        """
        Book a meeting on the owner's calendar.

        Args:
            owner_id: Calendar owner; the calendar is created on first use
            title: Non-empty meeting title
            start: Start instant
            end: End instant, exclusive; must be after start
            creator_id: User recorded as the meeting's creator
            description: Optional notes

        Returns:
            The persisted meeting

        Raises:
            ValidationError: On a missing identifier, empty title or bad range
            ConflictError: If the range overlaps a scheduled meeting
        """
        owner_id = require_identifier(owner_id, "owner_id")
        creator_id = require_identifier(creator_id, "creator_id")
        validate_interval(title, start, end)
        start, end = as_utc(start), as_utc(end)

        calendar = self._store.get_or_create_calendar(owner_id)
        logger.debug(
            "Booking meeting",
            calendar_id=calendar.id,
            start_time=start.isoformat(),
            end_time=end.isoformat(),
        )

        with self._locks.hold(calendar.id):
            with self._store.session_scope() as session:
                self._store.lock_calendar(session, calendar.id)
                conflict = self._detector.first_conflict(
                    calendar.id, start, end, session=session
                )
                if conflict is not None:
                    self._audit.log_booking_conflict(
                        user_id=creator_id,
                        calendar_id=calendar.id,
                        conflicting_meeting_id=conflict.id,
                        start_time=start,
                        end_time=end,
                    )
                    raise ConflictError(
                        "Meeting time conflicts with an existing event.",
                        details={"conflicting_meeting": describe_meeting(conflict)},
                    )
                meeting = self._store.insert_interval(
                    calendar.id,
                    title,
                    start,
                    end,
                    creator_id,
                    description=description,
                    session=session,
                )

        self._audit.log_meeting_booked(
            user_id=creator_id,
            meeting_id=meeting.id,
            calendar_id=calendar.id,
            start_time=start,
            end_time=end,
        )
        return meeting

    def list_meetings(self, owner_id: str) -> List[Meeting]:
        """Scheduled meetings on the owner's calendar, earliest first."""
        owner_id = require_identifier(owner_id, "owner_id")
        calendar = self._store.get_or_create_calendar(owner_id)
        return self._store.list_intervals(calendar.id)

    def cancel_meeting(self, meeting_id: int, owner_id: Optional[str] = None) -> Meeting:
        """
        Cancel a scheduled meeting.

        When ``owner_id`` is given, meetings on other calendars are reported
        as not found rather than cancelled.

        Raises:
            NotFoundError: If no scheduled meeting with this id exists
        """
        calendar_id = None
        if owner_id is not None:
            calendar = self._store.get_calendar(require_identifier(owner_id, "owner_id"))
            if calendar is None:
                raise NotFoundError("Meeting", str(meeting_id))
            calendar_id = calendar.id
        meeting = self._store.remove_interval(meeting_id, calendar_id=calendar_id)
        self._audit.log_meeting_cancelled(meeting_id, user_id=owner_id)
        return meeting

    def check_availability(
        self, owner_id: str, start: datetime, end: datetime
    ) -> List[Meeting]:
        """Every scheduled meeting that a booking of [start, end) would collide with."""
        owner_id = require_identifier(owner_id, "owner_id")
        if as_utc(end) <= as_utc(start):
            raise ValidationError(
                "End time must be after start time",
                field="end_time",
                value=end.isoformat(),
            )
        calendar = self._store.get_or_create_calendar(owner_id)
        return self._detector.find_conflicts(calendar.id, start, end)
