"""
Eligibility Service

Decides whether a student may apply to an internship. Pure: it reads
the student, the internship and the injected clock, and writes nothing.

Rules run in a fixed order and stop at the first failure; that rule's
message is the reason reported to the student.
"""

from typing import NamedTuple

from internship_portal.models.enums import (
    ApplicationStatus, InternshipLevel, InternshipStatus
)


class Eligibility(NamedTuple):
    ok: bool
    reason: str = ""


ELIGIBLE = Eligibility(True, "")


class EligibilityValidator:
    """`can_apply(student, internship) -> Eligibility`"""

    def __init__(self, clock, max_active_applications: int = 3, basic_only_max_year: int = 2):
        self.clock = clock
        self.max_active_applications = max_active_applications
        self.basic_only_max_year = basic_only_max_year

    def can_apply(self, student, internship) -> Eligibility:
        if student is None or internship is None:
            return Eligibility(False, "Student and internship are required.")

        today = self.clock.today()

        # 1. Approved and visible
        if internship.status != InternshipStatus.approved:
            # Closed by expiry reads as closed, not as unapproved
            if internship.status == InternshipStatus.filled and self._expired(internship, today):
                return Eligibility(False, "Internship is already closed.")
            return Eligibility(False, "Internship has not been approved yet.")
        if not internship.visible:
            return Eligibility(False, "Internship is currently hidden.")

        # 2. Preferred major
        if not internship.accepts_major(student.major):
            return Eligibility(False, "Major does not match the preferred major for this internship.")

        # 3. Lower-year students are limited to Basic
        if student.year_of_study <= self.basic_only_max_year and internship.level != InternshipLevel.basic:
            return Eligibility(False, "Lower-year students may only apply for BASIC level internships.")

        # 4. Application window (open-ended when unset)
        if internship.open_date is not None and today < internship.open_date:
            return Eligibility(False, "Internship is not open for applications yet.")
        if self._expired(internship, today):
            return Eligibility(False, "Internship is already closed.")

        # 5. Active-application ceiling
        if len(student.active_applications()) >= self.max_active_applications:
            return Eligibility(
                False, f"Maximum of {self.max_active_applications} active applications reached."
            )

        # 6. No live application for the same internship
        for application in student.applications:
            if application.internship is internship and application.status != ApplicationStatus.unsuccessful:
                return Eligibility(False, "You have already applied for this internship.")

        # 7. One accepted placement per student
        if student.has_accepted_placement():
            return Eligibility(False, "You have already accepted a placement.")

        # 8. Capacity
        if internship.is_full():
            return Eligibility(False, "Internship slots have been filled.")

        return ELIGIBLE

    @staticmethod
    def _expired(internship, today) -> bool:
        return internship.close_date is not None and today > internship.close_date
