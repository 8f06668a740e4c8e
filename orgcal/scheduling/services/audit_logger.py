from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from orgcal.common.logging_config import get_logger


class AuditEventType(Enum):
    """Types of audit events recorded by the scheduling service"""

    MEETING_BOOKED = "meeting_booked"
    MEETING_CANCELLED = "meeting_cancelled"
    BOOKING_CONFLICT = "booking_conflict"
    EVENT_CREATED = "event_created"
    EVENT_JOINED = "event_joined"


class AuditLogger:
    """Structured audit trail for calendar mutations"""

    def __init__(self) -> None:
        self.logger = get_logger("orgcal.scheduling.audit")

    def log_event(
        self,
        event_type: AuditEventType,
        user_id: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: str = "INFO",
    ) -> None:
        """
        Log an audit event

        Args:
            event_type: Type of event being logged
            user_id: ID of the user performing the action
            resource_id: ID of the resource being acted upon
            details: Additional details about the event
            severity: Log level (INFO, WARNING, ERROR)
        """
        audit_entry = {
            "audit_timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type.value,
            "actor_id": user_id,
            "resource_id": resource_id,
            "details": details or {},
        }

        message = f"Audit Event: {event_type.value}"
        if severity == "ERROR":
            self.logger.error(message, **audit_entry)
        elif severity == "WARNING":
            self.logger.warning(message, **audit_entry)
        else:
            self.logger.info(message, **audit_entry)

    def log_meeting_booked(
        self,
        user_id: str,
        meeting_id: int,
        calendar_id: int,
        start_time: datetime,
        end_time: datetime,
    ) -> None:
        self.log_event(
            event_type=AuditEventType.MEETING_BOOKED,
            user_id=user_id,
            resource_id=str(meeting_id),
            details={
                "calendar_id": calendar_id,
                "start_time": start_time.isoformat(),
                "end_time": end_time.isoformat(),
            },
        )

    def log_meeting_cancelled(
        self, meeting_id: int, user_id: Optional[str] = None
    ) -> None:
        self.log_event(
            event_type=AuditEventType.MEETING_CANCELLED,
            user_id=user_id,
            resource_id=str(meeting_id),
        )

    def log_booking_conflict(
        self,
        user_id: str,
        calendar_id: int,
        conflicting_meeting_id: int,
        start_time: datetime,
        end_time: datetime,
    ) -> None:
        """Log a rejected booking; expected, so only a warning"""
        self.log_event(
            event_type=AuditEventType.BOOKING_CONFLICT,
            user_id=user_id,
            resource_id=str(conflicting_meeting_id),
            details={
                "calendar_id": calendar_id,
                "requested_start": start_time.isoformat(),
                "requested_end": end_time.isoformat(),
            },
            severity="WARNING",
        )

    def log_event_created(self, user_id: str, event_id: int, title: str) -> None:
        self.log_event(
            event_type=AuditEventType.EVENT_CREATED,
            user_id=user_id,
            resource_id=str(event_id),
            details={"title": title},
        )

    def log_event_joined(self, user_id: str, meeting_id: int, title: str) -> None:
        self.log_event(
            event_type=AuditEventType.EVENT_JOINED,
            user_id=user_id,
            resource_id=str(meeting_id),
            details={"title": title},
        )


# Global audit logger instance
audit_logger = AuditLogger()
