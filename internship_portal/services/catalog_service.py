"""
Catalog Service

Owns every internship posting and its review/visibility state:

    submit  -> Pending, hidden         (approved representatives, max 5 live postings)
    approve -> Approved, visible       (staff)
    reject  -> Rejected, hidden        (staff, terminal)
    refresh -> Filled, hidden          (closing date passed or all slots taken)

Reads always run refresh_statuses() first so status and visibility are
derived from the current date and slot occupancy.
"""

import threading
from datetime import date
from typing import Dict, List, Optional

from internship_portal.core.errors import (
    InvalidTransition, NotOwned, QuotaExceeded, RuleViolation, Unapproved
)
from internship_portal.models.enums import InternshipLevel, InternshipStatus
from internship_portal.models.internship import Internship


class InternshipCatalog:

    def __init__(self, clock, notifier, max_internships_per_rep: int = 5,
                 max_slots: int = 10, visibility_auto_approve: bool = True):
        self.clock = clock
        self.notifier = notifier
        self.max_internships_per_rep = max_internships_per_rep
        self.max_slots = max_slots
        self.visibility_auto_approve = visibility_auto_approve
        self._internships: Dict[str, Internship] = {}
        self._lock = threading.RLock()

    # ============================================================
    # SUBMISSION
    # ============================================================

    def create(self, rep, title: str, description: str, level: InternshipLevel,
               preferred_major: Optional[str] = None, open_date: Optional[date] = None,
               close_date: Optional[date] = None, slot_count: int = 1) -> Internship:
        """Build an internship for a representative and submit it for review."""
        if rep is None or not rep.approved:
            raise Unapproved("Company representative has not been approved yet.")
        if not 1 <= slot_count <= self.max_slots:
            raise RuleViolation(f"Slot count must be between 1 and {self.max_slots}")
        if close_date is not None and close_date < self.clock.today():
            raise RuleViolation("Closing date cannot be in the past.")
        if open_date is not None and close_date is not None and close_date < open_date:
            raise RuleViolation("Closing date cannot be earlier than the opening date.")

        internship = Internship(
            title=title.strip(),
            description=(description or "").strip(),
            level=InternshipLevel(level),
            representative=rep,
            slot_count=slot_count,
            preferred_major=preferred_major,
            open_date=open_date,
            close_date=close_date,
            created_at=self.clock.now()
        )
        return self.submit(internship)

    def submit(self, internship: Internship) -> Internship:
        """
        Store a new posting as Pending and hidden.

        Raises:
            Unapproved: representative not approved
            QuotaExceeded: representative already has the maximum of non-rejected postings
        """
        rep = internship.representative
        if rep is None or not rep.approved:
            raise Unapproved("Only approved company representatives may submit internships.")

        with self._lock:
            live = sum(
                1 for existing in self._internships.values()
                if existing.representative is rep and existing.status != InternshipStatus.rejected
            )
            if live >= self.max_internships_per_rep:
                raise QuotaExceeded(f"Maximum of {self.max_internships_per_rep} internships reached.")
            internship.status = InternshipStatus.pending
            internship.visible = False
            self._internships[internship.internship_id] = internship

        self.notifier.internship_submitted(internship)
        return internship

    # ============================================================
    # STAFF REVIEW
    # ============================================================

    def _require_staff(self, staff):
        if staff is None or getattr(staff, "role", None) != "staff":
            raise NotOwned("Only career center staff may review internships.")

    def approve(self, internship: Internship, staff) -> Internship:
        self._require_staff(staff)
        with internship.lock:
            if internship.status != InternshipStatus.pending:
                raise InvalidTransition(f"Cannot approve an internship that is {internship.status.value}.")
            internship.status = InternshipStatus.approved
            internship.visible = True
        self.notifier.internship_decision(internship, approved=True)
        return internship

    def reject(self, internship: Internship, staff) -> Internship:
        self._require_staff(staff)
        with internship.lock:
            if internship.status != InternshipStatus.pending:
                raise InvalidTransition(f"Cannot reject an internship that is {internship.status.value}.")
            internship.status = InternshipStatus.rejected
            internship.visible = False
        self.notifier.internship_decision(internship, approved=False)
        return internship

    # ============================================================
    # REPRESENTATIVE ACTIONS
    # ============================================================

    def toggle_visibility(self, rep, internship: Internship, on: bool) -> Internship:
        """
        Show or hide a posting. Only Approved or Pending postings qualify.

        Turning a Pending posting on approves it when
        `visibility_auto_approve` is set; otherwise it is refused.
        """
        if internship.representative is not rep:
            raise NotOwned("Internship not managed by this representative.")
        if not rep.approved:
            raise Unapproved("Company representative has not been approved yet.")

        with internship.lock:
            if internship.status not in (InternshipStatus.approved, InternshipStatus.pending):
                raise InvalidTransition(
                    f"Cannot change visibility of an internship that is {internship.status.value}."
                )
            if on and internship.status == InternshipStatus.pending:
                if not self.visibility_auto_approve:
                    raise InvalidTransition("Internship must be approved by the career center first.")
                internship.status = InternshipStatus.approved
            internship.visible = bool(on)
        return internship

    def applications_for(self, rep, internship: Internship) -> list:
        if internship.representative is not rep:
            raise NotOwned("Internship not managed by this representative.")
        with internship.lock:
            return list(internship.applications)

    # ============================================================
    # DERIVED STATE
    # ============================================================

    def refresh_statuses(self):
        """
        Close postings whose closing date has passed while Approved, and
        any posting whose slots are all taken. Idempotent.
        """
        today = self.clock.today()
        with self._lock:
            internships = list(self._internships.values())
        for internship in internships:
            with internship.lock:
                if internship.status == InternshipStatus.rejected:
                    continue
                expired = (
                    internship.close_date is not None
                    and today > internship.close_date
                    and internship.status == InternshipStatus.approved
                )
                if expired or internship.is_full():
                    internship.status = InternshipStatus.filled
                    internship.visible = False

    # ============================================================
    # READS
    # ============================================================

    def get(self, internship_id: str) -> Optional[Internship]:
        self.refresh_statuses()
        return self._internships.get(internship_id)

    def all(self) -> List[Internship]:
        self.refresh_statuses()
        with self._lock:
            return sorted(self._internships.values(), key=lambda i: i.title.casefold())

    def visible(self) -> List[Internship]:
        return [i for i in self.all() if i.visible and i.status == InternshipStatus.approved]

    def pending_review(self) -> List[Internship]:
        return [i for i in self.all() if i.status == InternshipStatus.pending]

    def for_representative(self, rep) -> List[Internship]:
        return [i for i in self.all() if i.representative is rep]

    def eligible_for(self, student, validator) -> List[Internship]:
        return [i for i in self.visible() if validator.can_apply(student, i).ok]
