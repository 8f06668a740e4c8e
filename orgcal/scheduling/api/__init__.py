from orgcal.scheduling.api.events import router as events_router  # noqa: F401
from orgcal.scheduling.api.meetings import router as meetings_router  # noqa: F401
