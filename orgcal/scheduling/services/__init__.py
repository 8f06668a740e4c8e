from orgcal.scheduling.services.conflicts import (
    ConflictDetector,
    find_conflicts_in,
    intervals_overlap,
)
from orgcal.scheduling.services.event_catalog import EventCatalog
from orgcal.scheduling.services.event_projector import EventProjector
from orgcal.scheduling.services.interval_store import IntervalStore
from orgcal.scheduling.services.locks import CalendarLockRegistry
from orgcal.scheduling.services.scheduling_service import SchedulingService

__all__ = [
    "CalendarLockRegistry",
    "ConflictDetector",
    "EventCatalog",
    "EventProjector",
    "IntervalStore",
    "SchedulingService",
    "find_conflicts_in",
    "intervals_overlap",
]
