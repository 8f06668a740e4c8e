from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from orgcal.scheduling.schemas.meetings import Meeting


class EventCreate(BaseModel):
    """Request body for publishing an organizational event."""

    title: str = Field(..., description="Event title")
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    event_type: Optional[str] = Field(None, max_length=64)
    location: Optional[str] = Field(None, max_length=500)

    model_config = ConfigDict(extra="forbid")


class Event(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    created_by: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventSnapshot(BaseModel):
    """Point-in-time copy of the event fields a personal meeting is built from."""

    title: str
    description: Optional[str] = None
    start: datetime
    end: datetime

    model_config = ConfigDict(frozen=True)


class JoinEventRequest(BaseModel):
    event_id: int = Field(..., description="Catalog identifier of the event to join")

    model_config = ConfigDict(extra="forbid")


class JoinEventResponse(BaseModel):
    message: str = "Event added to calendar"
    meeting: Meeting
