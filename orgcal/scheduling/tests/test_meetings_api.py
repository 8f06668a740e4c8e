"""
Endpoint tests for /api/v1/calendar/meetings.

Checks status codes and the JSON error envelope for each failure kind.
"""

from orgcal.scheduling.tests.scheduling_test_base import BaseSchedulingTest, at

MEETINGS_URL = "/api/v1/calendar/meetings"


class TestMeetingsAPI(BaseSchedulingTest):
    def setup_method(self, method):
        super().setup_method(method)
        self.headers = {"X-User-Id": "alice"}

    def post_meeting(self, title="Sync", start=None, end=None, headers=None, **extra):
        body = {
            "title": title,
            "start_time": (start or at(10)).isoformat(),
            "end_time": (end or at(11)).isoformat(),
            **extra,
        }
        return self.client.post(
            MEETINGS_URL, json=body, headers=headers or self.headers
        )

    def test_book_meeting(self):
        resp = self.post_meeting(title="Planning", description="Q3 roadmap")
        assert resp.status_code == 201
        data = resp.json()
        assert data["title"] == "Planning"
        assert data["description"] == "Q3 roadmap"
        assert data["status"] == "scheduled"
        assert data["created_by"] == "alice"
        assert isinstance(data["id"], int)

    def test_list_meetings(self):
        self.post_meeting(title="Late", start=at(15), end=at(16))
        self.post_meeting(title="Early", start=at(8), end=at(9))
        resp = self.client.get(MEETINGS_URL, headers=self.headers)
        assert resp.status_code == 200
        assert [m["title"] for m in resp.json()] == ["Early", "Late"]

    def test_list_is_per_user(self):
        self.post_meeting()
        resp = self.client.get(MEETINGS_URL, headers={"X-User-Id": "bob"})
        assert resp.json() == []

    def test_conflict_returns_409_envelope(self):
        first = self.post_meeting(title="Standup").json()
        resp = self.post_meeting(start=at(10, 30), end=at(11, 30))

        assert resp.status_code == 409
        body = resp.json()
        assert body["type"] == "conflict_error"
        assert body["message"] == "Meeting time conflicts with an existing event."
        assert body["details"]["code"] == "SCHEDULING_CONFLICT"
        assert body["details"]["conflicting_meeting"]["id"] == first["id"]
        assert body["timestamp"]
        assert body["request_id"]

    def test_touching_meetings_allowed(self):
        assert self.post_meeting(start=at(10), end=at(11)).status_code == 201
        assert self.post_meeting(start=at(11), end=at(12)).status_code == 201

    def test_invalid_range_returns_400(self):
        resp = self.post_meeting(start=at(11), end=at(10))
        assert resp.status_code == 400
        body = resp.json()
        assert body["type"] == "validation_error"
        assert body["details"]["field"] == "end_time"

    def test_blank_title_returns_400(self):
        resp = self.post_meeting(title="   ")
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "title"

    def test_malformed_body_returns_422(self):
        resp = self.client.post(
            MEETINGS_URL,
            json={"title": "Sync", "start_time": "not a date", "end_time": "later"},
            headers=self.headers,
        )
        assert resp.status_code == 422

    def test_unknown_field_returns_422(self):
        resp = self.post_meeting(calendar_id=99)
        assert resp.status_code == 422

    def test_missing_user_header_returns_400(self):
        resp = self.client.get(MEETINGS_URL)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Missing X-User-Id header"

    def test_cancel_meeting(self):
        meeting_id = self.post_meeting().json()["id"]
        resp = self.client.delete(f"{MEETINGS_URL}/{meeting_id}", headers=self.headers)
        assert resp.status_code == 200
        assert resp.json() == {
            "message": "Meeting cancelled successfully",
            "meeting_id": meeting_id,
        }
        assert self.client.get(MEETINGS_URL, headers=self.headers).json() == []

    def test_cancel_unknown_returns_404(self):
        self.client.get(MEETINGS_URL, headers=self.headers)
        resp = self.client.delete(f"{MEETINGS_URL}/999", headers=self.headers)
        assert resp.status_code == 404
        assert resp.json()["type"] == "not_found"

    def test_cancel_twice_returns_404(self):
        meeting_id = self.post_meeting().json()["id"]
        self.client.delete(f"{MEETINGS_URL}/{meeting_id}", headers=self.headers)
        resp = self.client.delete(f"{MEETINGS_URL}/{meeting_id}", headers=self.headers)
        assert resp.status_code == 404

    def test_cannot_cancel_other_users_meeting(self):
        meeting_id = self.post_meeting().json()["id"]
        resp = self.client.delete(
            f"{MEETINGS_URL}/{meeting_id}", headers={"X-User-Id": "mallory"}
        )
        assert resp.status_code == 404
        assert len(self.client.get(MEETINGS_URL, headers=self.headers).json()) == 1

    def test_conflicts_endpoint(self):
        booked = self.post_meeting(start=at(10), end=at(11)).json()
        resp = self.client.get(
            f"{MEETINGS_URL}/conflicts",
            params={"start": at(10, 30).isoformat(), "end": at(12).isoformat()},
            headers=self.headers,
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["available"] is False
        assert [m["id"] for m in data["conflicts"]] == [booked["id"]]

    def test_conflicts_endpoint_free_range(self):
        self.post_meeting(start=at(10), end=at(11))
        resp = self.client.get(
            f"{MEETINGS_URL}/conflicts",
            params={"start": at(11).isoformat(), "end": at(12).isoformat()},
            headers=self.headers,
        )
        assert resp.json()["available"] is True
        assert resp.json()["conflicts"] == []

    def test_error_request_id_matches_header(self):
        self.post_meeting()
        resp = self.client.post(
            MEETINGS_URL,
            json={
                "title": "Clash",
                "start_time": at(10).isoformat(),
                "end_time": at(11).isoformat(),
            },
            headers={"X-User-Id": "alice", "X-Request-Id": "req-conflict-7"},
        )
        assert resp.status_code == 409
        assert resp.json()["request_id"] == "req-conflict-7"
        assert resp.headers["X-Request-Id"] == "req-conflict-7"

    def test_cancel_out_of_range_id_returns_404(self):
        resp = self.client.delete(f"{MEETINGS_URL}/{2**70}", headers=self.headers)
        assert resp.status_code == 404
        assert resp.json()["type"] == "not_found"

    def test_oversized_title_returns_400(self):
        resp = self.post_meeting(title="x" * 301)
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "title"
