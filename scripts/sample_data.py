"""
Shared sample data for the test scripts.

Builds an isolated PlacementEngine (no database, in-memory inbox, clock
pinned to TODAY) plus a few ready-made actors and postings.
"""
import sys
sys.path.insert(0, '.')

from datetime import date, timedelta

from internship_portal.core.clock import FixedClock
from internship_portal.core.config import Settings
from internship_portal.models.enums import InternshipLevel
from internship_portal.services.engine import PlacementEngine
from internship_portal.services.notification_service import InMemoryNotificationSink

TODAY = date(2025, 3, 3)
YESTERDAY = TODAY - timedelta(days=1)
NEXT_MONTH = TODAY + timedelta(days=30)


def make_engine(persistence=None, notification_sink=None, **overrides) -> PlacementEngine:
    """Fresh engine with default rule limits unless overridden."""
    clock = FixedClock(TODAY)
    settings = Settings(persistence_enabled=False, notification_backend="memory", **overrides)
    sink = notification_sink or InMemoryNotificationSink(clock=clock)
    return PlacementEngine(settings=settings, clock=clock, notification_sink=sink, persistence=persistence)


def seed_people(engine: PlacementEngine):
    """One staff member and one approved representative."""
    staff = engine.add_staff("staff1", "Casey Tan", "Career Office")
    rep = engine.add_representative("rep1", "Riley Ng", "Acme Corp", approved=True)
    return staff, rep


def post_internship(engine: PlacementEngine, rep, staff, title: str = "Backend Intern",
                    level: InternshipLevel = InternshipLevel.basic, slot_count: int = 1,
                    major: str = None, open_date: date = None, close_date: date = NEXT_MONTH):
    """Create an internship and have staff approve it (Approved + visible)."""
    internship = engine.catalog.create(
        rep, title, "Work on internal services.", level,
        preferred_major=major, open_date=open_date, close_date=close_date, slot_count=slot_count
    )
    engine.catalog.approve(internship, staff)
    return internship
