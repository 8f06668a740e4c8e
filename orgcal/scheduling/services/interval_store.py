"""
Interval store for the Scheduling Service.

Keeps one calendar per owner and the meetings booked on it. Every public
method runs in its own transaction unless the caller passes an open session,
which lets the scheduling service group the conflict check and the insert
into a single all-or-nothing unit.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Generator, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from orgcal.common.http_errors import (
    ErrorCode,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from orgcal.common.logging_config import get_logger
from orgcal.scheduling.models import Calendar, Meeting, MeetingStatus
from orgcal.scheduling.models.base import as_utc, is_row_id, utcnow
from orgcal.scheduling.models.calendar import MEETING_TITLE_MAX_LENGTH

logger = get_logger(__name__)


def validate_interval(
    title: Optional[str],
    start: datetime,
    end: datetime,
    max_title_length: int = MEETING_TITLE_MAX_LENGTH,
) -> None:
    """Reject empty or oversized titles and ranges whose end is not after their start."""
    if title is None or not title.strip():
        raise ValidationError("Title is required", field="title")
    if len(title.strip()) > max_title_length:
        raise ValidationError(
            f"Title must be at most {max_title_length} characters",
            field="title",
            details={"max_length": max_title_length},
        )
    if as_utc(end) <= as_utc(start):
        raise ValidationError(
            "End time must be after start time",
            field="end_time",
            value=end.isoformat(),
            details={"start_time": start.isoformat()},
        )


class IntervalStore:
    """Durable keeping of calendars and their meetings."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Open a transaction that commits on success and rolls back on any error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            raise self._storage_error(e) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def _use_session(
        self, session: Optional[Session]
    ) -> Generator[Session, None, None]:
        if session is not None:
            yield session
        else:
            with self.session_scope() as own_session:
                yield own_session

    def get_or_create_calendar(self, owner_id: str) -> Calendar:
        """
        Return the owner's calendar, creating it on first use.

        Concurrent first-time callers race on the unique owner_id constraint;
        the loser rolls back and reads the winner's row.
        """
        try:
            with self.session_scope() as session:
                calendar = self._find_calendar(session, owner_id)
                if calendar is not None:
                    return calendar
                calendar = Calendar(owner_id=owner_id)
                session.add(calendar)
                session.flush()
                logger.info("Created calendar", owner_id=owner_id, calendar_id=calendar.id)
                return calendar
        except IntegrityError:
            logger.info("Calendar created concurrently, re-reading", owner_id=owner_id)

        with self.session_scope() as session:
            calendar = self._find_calendar(session, owner_id)
        if calendar is None:
            raise ServiceError(
                "Calendar could not be created",
                code=ErrorCode.DATABASE_ERROR,
                details={"owner_id": owner_id},
            )
        return calendar

    def get_calendar(self, owner_id: str) -> Optional[Calendar]:
        with self.session_scope() as session:
            return self._find_calendar(session, owner_id)

    def lock_calendar(self, session: Session, calendar_id: int) -> None:
        """
        Take a row lock on the calendar for the rest of the session's transaction.

        Serializes bookings across processes on databases with row locking;
        SQLite ignores FOR UPDATE and relies on the in-process lock instead.
        """
        session.execute(
            select(Calendar.id).where(Calendar.id == calendar_id).with_for_update()
        )

    def list_intervals(
        self, calendar_id: int, session: Optional[Session] = None
    ) -> List[Meeting]:
        """Scheduled meetings on the calendar, earliest start first."""
        with self._use_session(session) as s:
            result = s.execute(
                select(Meeting)
                .where(
                    Meeting.calendar_id == calendar_id,
                    Meeting.status == MeetingStatus.scheduled,
                )
                .order_by(Meeting.start_time.asc(), Meeting.id.asc())
            )
            return list(result.scalars().all())

    def find_overlapping(
        self,
        calendar_id: int,
        start: datetime,
        end: datetime,
        limit: Optional[int] = None,
        session: Optional[Session] = None,
    ) -> List[Meeting]:
        """Scheduled meetings whose half-open range [start_time, end_time) meets [start, end)."""
        query = (
            select(Meeting)
            .where(
                Meeting.calendar_id == calendar_id,
                Meeting.status == MeetingStatus.scheduled,
                Meeting.start_time < as_utc(end),
                Meeting.end_time > as_utc(start),
            )
            .order_by(Meeting.start_time.asc(), Meeting.id.asc())
        )
        if limit is not None:
            query = query.limit(limit)
        with self._use_session(session) as s:
            return list(s.execute(query).scalars().all())

    def insert_interval(
        self,
        calendar_id: int,
        title: str,
        start: datetime,
        end: datetime,
        creator_id: str,
        description: Optional[str] = None,
        session: Optional[Session] = None,
    ) -> Meeting:
        """Persist a new scheduled meeting and return it with its assigned id."""
        validate_interval(title, start, end)
        meeting = Meeting(
            calendar_id=calendar_id,
            title=title.strip(),
            description=description,
            start_time=as_utc(start),
            end_time=as_utc(end),
            status=MeetingStatus.scheduled,
            created_by=creator_id,
        )
        with self._use_session(session) as s:
            s.add(meeting)
            s.flush()
        return meeting

    def get_interval(self, interval_id: int) -> Meeting:
        if not is_row_id(interval_id):
            raise NotFoundError("Meeting", str(interval_id))
        with self.session_scope() as session:
            meeting = session.get(Meeting, interval_id)
            if meeting is None or meeting.status != MeetingStatus.scheduled:
                raise NotFoundError("Meeting", str(interval_id))
            return meeting

    def remove_interval(
        self, interval_id: int, calendar_id: Optional[int] = None
    ) -> Meeting:
        """
        Cancel a scheduled meeting, keeping the row for history.

        Raises:
            NotFoundError: If the meeting does not exist, is already cancelled,
                or belongs to a different calendar than ``calendar_id``
        """
        if not is_row_id(interval_id):
            raise NotFoundError("Meeting", str(interval_id))
        with self.session_scope() as session:
            meeting = session.get(Meeting, interval_id, with_for_update=True)
            if (
                meeting is None
                or meeting.status != MeetingStatus.scheduled
                or (calendar_id is not None and meeting.calendar_id != calendar_id)
            ):
                raise NotFoundError("Meeting", str(interval_id))
            meeting.status = MeetingStatus.cancelled
            meeting.cancelled_at = utcnow()
            return meeting

    @staticmethod
    def _find_calendar(session: Session, owner_id: str) -> Optional[Calendar]:
        return session.execute(
            select(Calendar).where(Calendar.owner_id == owner_id)
        ).scalar_one_or_none()

    @staticmethod
    def _storage_error(error: SQLAlchemyError) -> ServiceError:
        logger.error(
            "Storage operation failed",
            error_type=type(error).__name__,
            error=str(error),
        )
        return ServiceError(
            "Database operation failed",
            code=ErrorCode.DATABASE_ERROR,
            details={"error_type": type(error).__name__},
        )
