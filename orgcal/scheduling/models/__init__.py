from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from orgcal.scheduling.models.base import Base as Base
from orgcal.scheduling.models.base import UTCDateTime as UTCDateTime
from orgcal.scheduling.models.calendar import Calendar as Calendar
from orgcal.scheduling.models.calendar import Meeting as Meeting
from orgcal.scheduling.models.calendar import MeetingStatus as MeetingStatus
from orgcal.scheduling.models.event import OrgEvent as OrgEvent


def create_db_engine(db_url: str, echo: bool = False) -> Engine:
    """Create a database engine for the given URL.

    The engine is owned by the process bootstrap; nothing in this package
    keeps a module-level reference to it.
    """
    kwargs: Dict[str, Any] = {"echo": echo}
    if db_url.startswith("sqlite"):
        # Request handlers run on FastAPI's threadpool
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
    else:
        kwargs.update(
            pool_size=10,
            max_overflow=20,
            pool_timeout=30,
            pool_recycle=3600,
            pool_pre_ping=True,
        )
    return create_engine(db_url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory whose instances stay readable after commit."""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


def create_all_tables_for_testing(engine: Engine) -> None:
    """Create all database tables for testing only. Use Alembic migrations in production."""
    Base.metadata.create_all(engine)
