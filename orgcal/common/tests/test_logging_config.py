from fastapi import FastAPI
from fastapi.testclient import TestClient

from orgcal.common.logging_config import (
    EnhancedTextRenderer,
    add_request_context,
    add_service_context,
    create_request_logging_middleware,
    request_id_var,
    user_id_var,
)


class TestProcessors:
    def test_service_name_from_logger(self):
        event = add_service_context(None, "info", {"logger": "orgcal.scheduling.api.meetings"})
        assert event["service"] == "scheduling"

    def test_foreign_logger_left_alone(self):
        event = add_service_context(None, "info", {"logger": "uvicorn.error"})
        assert "service" not in event

    def test_request_context_added(self):
        rid = request_id_var.set("req-42")
        uid = user_id_var.set("alice")
        try:
            event = add_request_context(None, "info", {})
        finally:
            request_id_var.reset(rid)
            user_id_var.reset(uid)
        assert event == {"request_id": "req-42", "user_id": "alice"}

    def test_defaults_not_added(self):
        assert add_request_context(None, "info", {}) == {}

    def test_explicit_request_id_wins(self):
        rid = request_id_var.set("req-ctx")
        try:
            event = add_request_context(None, "info", {"request_id": "req-explicit"})
        finally:
            request_id_var.reset(rid)
        assert event["request_id"] == "req-explicit"


class TestEnhancedTextRenderer:
    def test_renders_compact_line(self):
        renderer = EnhancedTextRenderer("scheduling")
        line = renderer(
            None,
            "info",
            {
                "timestamp": "2030-01-15T10:00:00Z",
                "level": "info",
                "logger": "orgcal.scheduling.services.locks",
                "event": "Booking meeting",
                "request_id": "abcdef123456",
                "user_id": "alice",
                "calendar_id": 7,
            },
        )
        assert "[scheduling]" in line
        assert "[INFO]" in line
        assert "[3456]" in line
        assert "scheduling.services.locks" in line
        assert "Booking meeting | User: alice" in line
        assert "calendar_id=7" in line


class TestRequestLoggingMiddleware:
    def setup_method(self):
        app = FastAPI()
        app.middleware("http")(create_request_logging_middleware())

        @app.get("/whoami")
        async def whoami():
            return {"user_id": user_id_var.get(), "request_id": request_id_var.get()}

        self.client = TestClient(app)

    def test_user_taken_from_header(self):
        resp = self.client.get("/whoami", headers={"X-User-Id": "alice"})
        assert resp.json()["user_id"] == "alice"

    def test_query_param_is_not_an_identity(self):
        resp = self.client.get("/whoami", params={"user_id": "mallory"})
        assert resp.json()["user_id"] == "anonymous"

    def test_request_id_echoed(self):
        resp = self.client.get("/whoami", headers={"X-Request-Id": "req-mw-1"})
        assert resp.json()["request_id"] == "req-mw-1"
        assert resp.headers["X-Request-Id"] == "req-mw-1"
