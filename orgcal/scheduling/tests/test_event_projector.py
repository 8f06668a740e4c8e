from unittest.mock import MagicMock

import pytest

from orgcal.common.http_errors import ConflictError, NotFoundError
from orgcal.scheduling.models import Meeting
from orgcal.scheduling.models.calendar import MEETING_TITLE_MAX_LENGTH
from orgcal.scheduling.models.event import EVENT_TITLE_MAX_LENGTH
from orgcal.scheduling.schemas import EventSnapshot
from orgcal.scheduling.services.event_projector import EVENT_TITLE_PREFIX, EventProjector
from orgcal.scheduling.tests.scheduling_test_base import BaseSchedulingTest, at


class TestEventProjector(BaseSchedulingTest):
    def setup_method(self, method):
        super().setup_method(method)
        self.snapshot = EventSnapshot(
            title="Seminar", description="Guest talk", start=at(14), end=at(15)
        )

    def test_join_creates_prefixed_meeting(self):
        meeting = self.projector.join_event(self.snapshot, "ursula")

        assert meeting.title == "[Event] Seminar"
        assert meeting.description == "Guest talk"
        assert meeting.start_time == at(14)
        assert meeting.end_time == at(15)
        assert meeting.created_by == "ursula"
        assert [m.id for m in self.scheduling.list_meetings("ursula")] == [meeting.id]

    def test_joining_twice_conflicts(self):
        self.projector.join_event(self.snapshot, "ursula")
        with pytest.raises(ConflictError):
            self.projector.join_event(self.snapshot, "ursula")

    def test_join_conflicts_with_existing_meeting(self):
        self.book(owner_id="ursula", start=at(14, 30), end=at(15, 30))
        with pytest.raises(ConflictError):
            self.projector.join_event(self.snapshot, "ursula")

    def test_join_after_cancel_succeeds(self):
        first = self.projector.join_event(self.snapshot, "ursula")
        self.scheduling.cancel_meeting(first.id, owner_id="ursula")
        second = self.projector.join_event(self.snapshot, "ursula")
        assert second.id != first.id

    def test_join_by_id(self):
        event = self.catalog.create_event(
            title="Hackathon", start=at(9), end=at(17), created_by="organizer"
        )
        meeting = self.projector.join_event_by_id(event.id, "victor")
        assert meeting.title == "[Event] Hackathon"
        assert meeting.start_time == at(9)

    def test_join_by_unknown_id(self):
        with pytest.raises(NotFoundError):
            self.projector.join_event_by_id(999, "victor")
        assert self.store.get_calendar("victor") is None

    def test_joined_event_does_not_change_catalog(self):
        event = self.catalog.create_event(
            title="Hackathon", start=at(9), end=at(17), created_by="organizer"
        )
        self.projector.join_event_by_id(event.id, "victor")
        assert self.catalog.get_event(event.id).title == "Hackathon"

    def test_join_event_with_longest_title(self):
        title = "T" * EVENT_TITLE_MAX_LENGTH
        event = self.catalog.create_event(
            title=title, start=at(9), end=at(10), created_by="organizer"
        )
        meeting = self.projector.join_event_by_id(event.id, "victor")

        assert meeting.title == EVENT_TITLE_PREFIX + title
        assert len(meeting.title) <= Meeting.__table__.c.title.type.length
        assert EVENT_TITLE_MAX_LENGTH + len(EVENT_TITLE_PREFIX) <= MEETING_TITLE_MAX_LENGTH

    def test_join_by_out_of_range_id(self):
        with pytest.raises(NotFoundError):
            self.projector.join_event_by_id(2**70, "victor")

    def test_join_is_audited(self):
        audit = MagicMock()
        projector = EventProjector(self.scheduling, self.catalog, audit=audit)
        meeting = projector.join_event(self.snapshot, "ursula")
        audit.log_event_joined.assert_called_once_with("ursula", meeting.id, "Seminar")

    def test_conflicting_join_is_not_audited(self):
        audit = MagicMock()
        projector = EventProjector(self.scheduling, self.catalog, audit=audit)
        projector.join_event(self.snapshot, "ursula")
        with pytest.raises(ConflictError):
            projector.join_event(self.snapshot, "ursula")
        assert audit.log_event_joined.call_count == 1
