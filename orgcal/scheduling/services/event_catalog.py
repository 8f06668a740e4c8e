"""
Organizational event catalog.

Events are organization-wide entries that are not owned by any calendar.
Joining one goes through the EventProjector, which only ever sees an
EventSnapshot taken from here.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select

from orgcal.common.http_errors import NotFoundError
from orgcal.common.logging_config import get_logger
from orgcal.scheduling.models import OrgEvent
from orgcal.scheduling.models.base import as_utc, is_row_id
from orgcal.scheduling.models.event import EVENT_TITLE_MAX_LENGTH
from orgcal.scheduling.schemas.events import EventSnapshot
from orgcal.scheduling.services.audit_logger import AuditLogger, audit_logger
from orgcal.scheduling.services.interval_store import (
    IntervalStore,
    validate_interval,
)
from orgcal.scheduling.services.scheduling_service import require_identifier

logger = get_logger(__name__)


class EventCatalog:
    def __init__(self, store: IntervalStore, audit: Optional[AuditLogger] = None) -> None:
        self._store = store
        self._audit = audit or audit_logger

    def list_events(
        self, event_type: Optional[str] = None, search: Optional[str] = None
    ) -> List[OrgEvent]:
        """
        List catalog events, earliest start first.

        Args:
            event_type: Only events of this type
            search: Case-insensitive substring of the title
        """
        query = select(OrgEvent)
        if event_type:
            query = query.where(OrgEvent.event_type == event_type)
        if search:
            query = query.where(func.lower(OrgEvent.title).contains(search.lower(), autoescape=True))
        query = query.order_by(OrgEvent.start_date.asc(), OrgEvent.id.asc())

        with self._store.session_scope() as session:
            return list(session.execute(query).scalars().all())

    def create_event(
        self,
        title: str,
        start: datetime,
        end: datetime,
        created_by: str,
        description: Optional[str] = None,
        event_type: Optional[str] = None,
        location: Optional[str] = None,
    ) -> OrgEvent:
        created_by = require_identifier(created_by, "created_by")
        validate_interval(title, start, end, max_title_length=EVENT_TITLE_MAX_LENGTH)
        event = OrgEvent(
            title=title.strip(),
            description=description,
            event_type=event_type,
            start_date=as_utc(start),
            end_date=as_utc(end),
            location=location,
            created_by=created_by,
        )
        with self._store.session_scope() as session:
            session.add(event)
            session.flush()

        logger.info("Event created", event_id=event.id, event_type=event_type)
        self._audit.log_event_created(created_by, event.id, event.title)
        return event

    def get_event(self, event_id: int) -> OrgEvent:
        if not is_row_id(event_id):
            raise NotFoundError("Event", str(event_id))
        with self._store.session_scope() as session:
            event = session.get(OrgEvent, event_id)
            if event is None:
                raise NotFoundError("Event", str(event_id))
            return event

    def get_snapshot(self, event_id: int) -> EventSnapshot:
        event = self.get_event(event_id)
        return EventSnapshot(
            title=event.title,
            description=event.description,
            start=event.start_date,
            end=event.end_date,
        )
