from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

# Integer primary keys are 32-bit on PostgreSQL
MAX_ROW_ID = 2**31 - 1


class Base(DeclarativeBase):
    pass


def is_row_id(value: int) -> bool:
    """Whether ``value`` fits an integer primary key; larger ids cannot exist."""
    return 0 < value <= MAX_ROW_ID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware DateTime stored as UTC.

    SQLite drops tzinfo on write, so values are normalized before binding and
    re-tagged as UTC on load. Range comparisons in SQL stay correct on every
    backend because all stored instants share one offset.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: Optional[datetime], dialect: Dialect
    ) -> Optional[datetime]:
        if value is None:
            return None
        return as_utc(value)

    def process_result_value(
        self, value: Optional[Any], dialect: Dialect
    ) -> Optional[datetime]:
        if value is None:
            return None
        return as_utc(value)
