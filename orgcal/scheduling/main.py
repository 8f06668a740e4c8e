from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from orgcal.common.http_errors import register_orgcal_exception_handlers
from orgcal.common.logging_config import (
    create_request_logging_middleware,
    get_logger,
    log_service_shutdown,
    log_service_startup,
    setup_service_logging,
)
from orgcal.scheduling.api import events_router, meetings_router
from orgcal.scheduling.models import create_db_engine, create_session_factory
from orgcal.scheduling.services.conflicts import ConflictDetector
from orgcal.scheduling.services.event_catalog import EventCatalog
from orgcal.scheduling.services.event_projector import EventProjector
from orgcal.scheduling.services.interval_store import IntervalStore
from orgcal.scheduling.services.locks import CalendarLockRegistry
from orgcal.scheduling.services.scheduling_service import SchedulingService
from orgcal.scheduling.settings import Settings, get_settings

# Set up centralized logging - will be initialized in lifespan
logger = get_logger(__name__)


def configure_services(app: FastAPI, settings: Settings) -> Engine:
    """Build the storage and service graph and attach it to ``app.state``.

    Returns the engine so the caller can dispose of it on shutdown.
    """
    engine = create_db_engine(settings.db_url_scheduling, echo=settings.db_echo)
    store = IntervalStore(create_session_factory(engine))
    scheduling = SchedulingService(
        store,
        detector=ConflictDetector(store),
        locks=CalendarLockRegistry(timeout_seconds=settings.lock_timeout_seconds),
    )
    catalog = EventCatalog(store)

    app.state.engine = engine
    app.state.scheduling_service = scheduling
    app.state.event_catalog = catalog
    app.state.event_projector = EventProjector(scheduling, catalog)
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup event logic
    settings = get_settings()

    setup_service_logging(
        service_name="scheduling",
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    engine = configure_services(app, settings)
    log_service_startup(
        "scheduling",
        version="0.1.0",
        lock_timeout_seconds=settings.lock_timeout_seconds,
    )
    yield
    # Shutdown event logic
    engine.dispose()
    log_service_shutdown("scheduling")


def create_app() -> FastAPI:
    app = FastAPI(
        title="OrgCal Scheduling Service",
        version="0.1.0",
        description="Personal calendars and organizational events for OrgCal.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    app.middleware("http")(create_request_logging_middleware())

    # Register standardized exception handlers
    register_orgcal_exception_handlers(app)

    app.include_router(meetings_router, prefix="/api/v1/calendar", tags=["calendar"])
    app.include_router(events_router, prefix="/api/v1/events", tags=["events"])

    @app.get("/")
    def root() -> dict:
        logger.info("Root endpoint accessed")
        return {"message": "Welcome to the OrgCal Scheduling Service"}

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
