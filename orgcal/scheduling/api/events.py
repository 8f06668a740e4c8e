from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from orgcal.common.logging_config import get_logger
from orgcal.scheduling.api.auth import get_user_id_from_request
from orgcal.scheduling.api.dependencies import get_event_catalog, get_event_projector
from orgcal.scheduling.schemas import (
    Event,
    EventCreate,
    JoinEventRequest,
    JoinEventResponse,
    Meeting,
)
from orgcal.scheduling.services.event_catalog import EventCatalog
from orgcal.scheduling.services.event_projector import EventProjector

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=List[Event])
def list_events(
    type: Optional[str] = Query(None, description="Filter by event type"),
    search: Optional[str] = Query(None, description="Substring of the title"),
    catalog: EventCatalog = Depends(get_event_catalog),
) -> List[Event]:
    events = catalog.list_events(event_type=type, search=search)
    return [Event.model_validate(e) for e in events]


@router.post("", response_model=Event, status_code=201)
def create_event(
    body: EventCreate,
    user_id: str = Depends(get_user_id_from_request),
    catalog: EventCatalog = Depends(get_event_catalog),
) -> Event:
    event = catalog.create_event(
        title=body.title,
        start=body.start_date,
        end=body.end_date,
        created_by=user_id,
        description=body.description,
        event_type=body.event_type,
        location=body.location,
    )
    return Event.model_validate(event)


@router.post("/join", response_model=JoinEventResponse, status_code=201)
def join_event(
    body: JoinEventRequest,
    user_id: str = Depends(get_user_id_from_request),
    projector: EventProjector = Depends(get_event_projector),
) -> JoinEventResponse:
    """
    Copy a catalog event onto the caller's calendar.

    404 if the event does not exist, 409 if it overlaps one of the
    caller's meetings.
    """
    meeting = projector.join_event_by_id(body.event_id, user_id)
    return JoinEventResponse(meeting=Meeting.model_validate(meeting))


@router.get("/{event_id}", response_model=Event)
def get_event(
    event_id: int,
    catalog: EventCatalog = Depends(get_event_catalog),
) -> Event:
    return Event.model_validate(catalog.get_event(event_id))
