from typing import Optional

from orgcal.common.logging_config import get_logger
from orgcal.scheduling.models import Meeting
from orgcal.scheduling.schemas.events import EventSnapshot
from orgcal.scheduling.services.audit_logger import AuditLogger, audit_logger
from orgcal.scheduling.services.event_catalog import EventCatalog
from orgcal.scheduling.services.scheduling_service import SchedulingService

logger = get_logger(__name__)

EVENT_TITLE_PREFIX = "[Event] "


class EventProjector:
    """Turns an organizational event into a meeting on a user's own calendar.

    Bookings go through SchedulingService.book_meeting, so joining an event
    that overlaps an existing meeting fails with ConflictError.
    """

    def __init__(
        self,
        scheduling: SchedulingService,
        catalog: EventCatalog,
        audit: Optional[AuditLogger] = None,
    ) -> None:
        self._scheduling = scheduling
        self._catalog = catalog
        self._audit = audit or audit_logger

    def join_event(self, snapshot: EventSnapshot, user_id: str) -> Meeting:
        meeting = self._scheduling.book_meeting(
            owner_id=user_id,
            title=f"{EVENT_TITLE_PREFIX}{snapshot.title}",
            start=snapshot.start,
            end=snapshot.end,
            creator_id=user_id,
            description=snapshot.description,
        )
        self._audit.log_event_joined(user_id, meeting.id, snapshot.title)
        return meeting

    def join_event_by_id(self, event_id: int, user_id: str) -> Meeting:
        """Resolve the event in the catalog, then join it. NotFoundError if it is missing."""
        snapshot = self._catalog.get_snapshot(event_id)
        logger.info("Joining event", event_id=event_id)
        return self.join_event(snapshot, user_id)
