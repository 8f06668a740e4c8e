from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from orgcal.scheduling.models.calendar import MeetingStatus


class MeetingCreate(BaseModel):
    """Request body for booking a meeting on the caller's calendar."""

    title: str = Field(..., description="Meeting title")
    start_time: datetime = Field(..., description="Start instant (ISO 8601)")
    end_time: datetime = Field(..., description="End instant, exclusive (ISO 8601)")
    description: Optional[str] = Field(None, description="Optional meeting notes")

    model_config = ConfigDict(extra="forbid")


class Meeting(BaseModel):
    id: int
    calendar_id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: MeetingStatus
    created_by: str
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MeetingCancelled(BaseModel):
    message: str = "Meeting cancelled successfully"
    meeting_id: int


class AvailabilityResponse(BaseModel):
    start_time: datetime
    end_time: datetime
    available: bool
    conflicts: List[Meeting] = Field(default_factory=list)
