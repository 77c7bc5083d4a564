"""
Placement Engine - wires the allocation services together.

Holds:
- the user directory (students, representatives, staff)
- EligibilityValidator, SlotAllocator, ApplicationLifecycle,
  WithdrawalWorkflow, InternshipCatalog, AccountRequestWorkflow
- the notification dispatcher and the optional persistence sink

This is the only place that reads settings; the services themselves
take plain arguments.
"""

import logging
import threading
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from internship_portal.core.clock import SystemClock
from internship_portal.core.config import Settings, get_settings
from internship_portal.models.account_request import AccountRequest
from internship_portal.models.application import Application, WithdrawalRequest
from internship_portal.models.internship import Internship
from internship_portal.models.users import CareerCenterStaff, CompanyRep, Student
from internship_portal.services.account_service import AccountRequestWorkflow
from internship_portal.services.application_service import ApplicationLifecycle
from internship_portal.services.catalog_service import InternshipCatalog
from internship_portal.services.eligibility_service import EligibilityValidator
from internship_portal.services.notification_service import (
    NotificationDispatcher, NotificationSink, get_notification_sink
)
from internship_portal.services.persistence_service import PersistenceSink, SqlPersistence
from internship_portal.services.slot_service import SlotAllocator
from internship_portal.services.withdrawal_service import WithdrawalWorkflow

logger = logging.getLogger(__name__)


class UserDirectory:
    """In-process registry of the actors known to the engine."""

    def __init__(self):
        self._users: Dict[str, object] = {}
        self._lock = threading.Lock()

    def add(self, user):
        with self._lock:
            if user.user_id in self._users:
                raise ValueError(f"User {user.user_id} already exists")
            self._users[user.user_id] = user
        return user

    def get(self, user_id: str):
        return self._users.get(user_id)

    def _of_type(self, user_id: str, cls):
        user = self._users.get(user_id)
        return user if isinstance(user, cls) else None

    def student(self, user_id: str) -> Optional[Student]:
        return self._of_type(user_id, Student)

    def representative(self, user_id: str) -> Optional[CompanyRep]:
        return self._of_type(user_id, CompanyRep)

    def staff(self, user_id: str) -> Optional[CareerCenterStaff]:
        return self._of_type(user_id, CareerCenterStaff)

    def staff_members(self) -> List[CareerCenterStaff]:
        with self._lock:
            return [u for u in self._users.values() if isinstance(u, CareerCenterStaff)]

    def staff_ids(self) -> List[str]:
        return [s.user_id for s in self.staff_members()]


class PlacementEngine:

    def __init__(self, settings: Settings = None, clock=None,
                 notification_sink: NotificationSink = None,
                 persistence: Optional[PersistenceSink] = None):
        self.settings = settings or get_settings()
        self.clock = clock or SystemClock()
        self.directory = UserDirectory()

        self.sink = notification_sink or get_notification_sink(self.settings, clock=self.clock)
        self.notifier = NotificationDispatcher(self.sink, staff_ids=self.directory.staff_ids)
        self.persistence = persistence

        self.validator = EligibilityValidator(
            self.clock,
            max_active_applications=self.settings.max_active_applications,
            basic_only_max_year=self.settings.basic_only_max_year
        )
        self.slots = SlotAllocator()
        self.applications = ApplicationLifecycle(self.validator, self.slots, self.notifier, self.clock)
        self.withdrawals = WithdrawalWorkflow(self.slots, self.notifier, self.clock)
        self.catalog = InternshipCatalog(
            self.clock,
            self.notifier,
            max_internships_per_rep=self.settings.max_internships_per_rep,
            max_slots=self.settings.max_slots_per_internship,
            visibility_auto_approve=self.settings.visibility_auto_approve
        )
        self.accounts = AccountRequestWorkflow(self.notifier, self.clock)

    # ------------------------------------------------------------
    # Directory helpers
    # ------------------------------------------------------------

    def add_student(self, user_id: str, name: str, year_of_study: int, major: str) -> Student:
        return self.directory.add(Student(user_id, name, year_of_study, major))

    def add_staff(self, user_id: str, name: str, department: str = "") -> CareerCenterStaff:
        return self.directory.add(CareerCenterStaff(user_id, name, department))

    def add_representative(self, user_id: str, name: str, company_name: str, department: str = "",
                           position: str = "", approved: bool = False) -> CompanyRep:
        """Register a representative and open their account request."""
        rep = self.directory.add(CompanyRep(user_id, name, company_name, department, position, approved))
        self.persist(self.accounts.open(rep))
        return rep

    # ------------------------------------------------------------
    # Persistence (caller-side, after a successful mutation)
    # ------------------------------------------------------------

    def persist(self, *entities):
        """Write entities to the persistence sink. Failures are logged, never raised."""
        if self.persistence is None:
            return
        for entity in entities:
            try:
                if isinstance(entity, Internship):
                    self.persistence.save_internship(entity)
                elif isinstance(entity, Application):
                    self.persistence.save_application(entity)
                elif isinstance(entity, WithdrawalRequest):
                    self.persistence.save_withdrawal(entity)
                elif isinstance(entity, AccountRequest):
                    self.persistence.save_account_request(entity)
            except SQLAlchemyError:
                logger.exception("Failed to persist %s", type(entity).__name__)

    def workload_reminder(self, staff: CareerCenterStaff):
        self.notifier.staff_workload_reminder(
            staff, len(self.catalog.pending_review()), len(self.withdrawals.pending())
        )


# Singleton instance
_placement_engine: PlacementEngine = None


def get_placement_engine() -> PlacementEngine:
    """Get or create the process-wide engine (singleton pattern)"""
    global _placement_engine
    if _placement_engine is None:
        settings = get_settings()
        persistence = SqlPersistence() if settings.persistence_enabled else None
        _placement_engine = PlacementEngine(settings=settings, persistence=persistence)
    return _placement_engine
