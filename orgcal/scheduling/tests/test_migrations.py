import os
import tempfile
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from orgcal.scheduling.models import create_db_engine, create_session_factory
from orgcal.scheduling.models.calendar import MEETING_TITLE_MAX_LENGTH
from orgcal.scheduling.services.interval_store import IntervalStore
from orgcal.scheduling.settings import reset_settings
from orgcal.scheduling.tests.scheduling_test_base import at

ALEMBIC_INI = Path(__file__).resolve().parents[1] / "alembic.ini"


class TestMigrations:
    def setup_method(self, method):
        self._db_fd, self._db_path = tempfile.mkstemp(suffix=".sqlite3")
        self.db_url = f"sqlite:///{self._db_path}"
        os.environ["DB_URL_SCHEDULING"] = self.db_url
        reset_settings()

    def teardown_method(self, method):
        os.environ.pop("DB_URL_SCHEDULING", None)
        reset_settings()
        os.close(self._db_fd)
        if os.path.exists(self._db_path):
            os.unlink(self._db_path)

    def test_upgrade_creates_usable_schema(self):
        command.upgrade(Config(str(ALEMBIC_INI)), "head")

        engine = create_db_engine(self.db_url)
        try:
            tables = set(inspect(engine).get_table_names())
            assert {"calendars", "meetings", "events"} <= tables
            title = next(
                c for c in inspect(engine).get_columns("meetings") if c["name"] == "title"
            )
            assert title["type"].length == MEETING_TITLE_MAX_LENGTH

            store = IntervalStore(create_session_factory(engine))
            calendar = store.get_or_create_calendar("alice")
            meeting = store.insert_interval(calendar.id, "Sync", at(9), at(10), "alice")
            assert store.list_intervals(calendar.id)[0].id == meeting.id
        finally:
            engine.dispose()
