import pytest
from pydantic import ValidationError as PydanticValidationError

from orgcal.common.http_errors import NotFoundError, ValidationError
from orgcal.scheduling.models.event import EVENT_TITLE_MAX_LENGTH
from orgcal.scheduling.tests.scheduling_test_base import BaseSchedulingTest, at


class TestEventCatalog(BaseSchedulingTest):
    def create(self, title="All hands", start=None, end=None, **kwargs):
        return self.catalog.create_event(
            title=title,
            start=start or at(15),
            end=end or at(16),
            created_by=kwargs.pop("created_by", "organizer"),
            **kwargs,
        )

    def test_create_and_get(self):
        event = self.create(
            description="Quarterly update", event_type="company", location="Atrium"
        )
        fetched = self.catalog.get_event(event.id)
        assert fetched.title == "All hands"
        assert fetched.event_type == "company"
        assert fetched.location == "Atrium"
        assert fetched.start_date == at(15)
        assert fetched.created_by == "organizer"

    def test_create_requires_creator(self):
        with pytest.raises(ValidationError) as exc_info:
            self.create(created_by="")
        assert exc_info.value.field == "created_by"

    def test_create_rejects_bad_range(self):
        with pytest.raises(ValidationError):
            self.create(start=at(16), end=at(15))

    def test_create_rejects_empty_title(self):
        with pytest.raises(ValidationError):
            self.create(title="")

    def test_get_unknown_raises_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            self.catalog.get_event(404)
        assert exc_info.value.resource == "Event"

    def test_list_is_ordered_by_start(self):
        self.create(title="Late", start=at(17), end=at(18))
        self.create(title="Early", start=at(8), end=at(9))
        assert [e.title for e in self.catalog.list_events()] == ["Early", "Late"]

    def test_list_filters_by_type(self):
        self.create(title="Seminar", event_type="learning")
        self.create(title="Party", event_type="social")
        events = self.catalog.list_events(event_type="learning")
        assert [e.title for e in events] == ["Seminar"]

    def test_search_is_case_insensitive_substring(self):
        self.create(title="Python Seminar")
        self.create(title="Team lunch")
        events = self.catalog.list_events(search="seminar")
        assert [e.title for e in events] == ["Python Seminar"]

    def test_search_treats_wildcards_literally(self):
        self.create(title="100% done party")
        self.create(title="Retro")
        assert [e.title for e in self.catalog.list_events(search="%")] == [
            "100% done party"
        ]

    def test_snapshot_copies_event_fields(self):
        event = self.create(title="Seminar", description="Talks")
        snapshot = self.catalog.get_snapshot(event.id)
        assert snapshot.title == "Seminar"
        assert snapshot.description == "Talks"
        assert snapshot.start == at(15)
        assert snapshot.end == at(16)

    def test_snapshot_is_immutable(self):
        snapshot = self.catalog.get_snapshot(self.create().id)
        with pytest.raises(PydanticValidationError):
            snapshot.title = "Changed"

    def test_create_rejects_oversized_title(self):
        with pytest.raises(ValidationError) as exc_info:
            self.create(title="x" * (EVENT_TITLE_MAX_LENGTH + 1))
        assert exc_info.value.field == "title"

    def test_get_out_of_range_id_raises_not_found(self):
        with pytest.raises(NotFoundError):
            self.catalog.get_event(2**70)
        with pytest.raises(NotFoundError):
            self.catalog.get_snapshot(0)
