"""
Scheduling service request and response schemas.
"""

from orgcal.scheduling.schemas.events import (
    Event,
    EventCreate,
    EventSnapshot,
    JoinEventRequest,
    JoinEventResponse,
)
from orgcal.scheduling.schemas.meetings import (
    AvailabilityResponse,
    Meeting,
    MeetingCancelled,
    MeetingCreate,
)

__all__ = [
    "AvailabilityResponse",
    "Event",
    "EventCreate",
    "EventSnapshot",
    "JoinEventRequest",
    "JoinEventResponse",
    "Meeting",
    "MeetingCancelled",
    "MeetingCreate",
]
