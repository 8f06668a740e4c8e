from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query

from orgcal.common.logging_config import get_logger
from orgcal.scheduling.api.auth import get_user_id_from_request
from orgcal.scheduling.api.dependencies import get_scheduling_service
from orgcal.scheduling.schemas import (
    AvailabilityResponse,
    Meeting,
    MeetingCancelled,
    MeetingCreate,
)
from orgcal.scheduling.services.scheduling_service import SchedulingService

logger = get_logger(__name__)

router = APIRouter()


@router.get("/meetings", response_model=List[Meeting])
def list_meetings(
    user_id: str = Depends(get_user_id_from_request),
    service: SchedulingService = Depends(get_scheduling_service),
) -> List[Meeting]:
    meetings = service.list_meetings(user_id)
    return [Meeting.model_validate(m) for m in meetings]


@router.post("/meetings", response_model=Meeting, status_code=201)
def book_meeting(
    body: MeetingCreate,
    user_id: str = Depends(get_user_id_from_request),
    service: SchedulingService = Depends(get_scheduling_service),
) -> Meeting:
    """Book a meeting on the caller's calendar. 409 if the time is taken."""
    meeting = service.book_meeting(
        owner_id=user_id,
        title=body.title,
        start=body.start_time,
        end=body.end_time,
        creator_id=user_id,
        description=body.description,
    )
    logger.info("Meeting booked", meeting_id=meeting.id)
    return Meeting.model_validate(meeting)


@router.get("/meetings/conflicts", response_model=AvailabilityResponse)
def check_availability(
    start: datetime = Query(..., description="Start of the candidate range"),
    end: datetime = Query(..., description="End of the candidate range"),
    user_id: str = Depends(get_user_id_from_request),
    service: SchedulingService = Depends(get_scheduling_service),
) -> AvailabilityResponse:
    conflicts = service.check_availability(user_id, start, end)
    return AvailabilityResponse(
        start_time=start,
        end_time=end,
        available=not conflicts,
        conflicts=[Meeting.model_validate(m) for m in conflicts],
    )


@router.delete("/meetings/{meeting_id}", response_model=MeetingCancelled)
def cancel_meeting(
    meeting_id: int,
    user_id: str = Depends(get_user_id_from_request),
    service: SchedulingService = Depends(get_scheduling_service),
) -> MeetingCancelled:
    service.cancel_meeting(meeting_id, owner_id=user_id)
    return MeetingCancelled(meeting_id=meeting_id)
