"""
FastAPI dependencies that hand out the services built at startup.

The lifespan in ``orgcal.scheduling.main`` stores one instance of each
service on ``app.state``; routes never construct their own.
"""

from fastapi import Request

from orgcal.scheduling.services.event_catalog import EventCatalog
from orgcal.scheduling.services.event_projector import EventProjector
from orgcal.scheduling.services.scheduling_service import SchedulingService


def get_scheduling_service(request: Request) -> SchedulingService:
    return request.app.state.scheduling_service


def get_event_catalog(request: Request) -> EventCatalog:
    return request.app.state.event_catalog


def get_event_projector(request: Request) -> EventProjector:
    return request.app.state.event_projector
