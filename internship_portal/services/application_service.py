"""
Application Service

PURPOSE:
Own the lifecycle of a student's application:
    Pending -> Successful (offer) -> Successful + slot (accepted placement)
    Pending/Successful -> Unsuccessful
    Unsuccessful -> Pending (re-opened)
Withdrawn is reached only through the withdrawal workflow.

HOW IT WORKS:
1. submit() re-runs every eligibility rule and creates the application
   while holding the student and internship locks, so two concurrent
   submissions cannot both pass the ceiling or duplicate checks
2. set_status() is the only writer of application status; slot effects
   (assign on confirmed offers, release on rejection) happen here, not in
   a setter on the entity
3. accept_placement() rejects the student's other live applications and
   confirms the chosen one into a slot

When an internship's last slot is taken, every active co-applicant who
holds no slot is marked Unsuccessful and the internship becomes Filled.

Notifications are sent after the state change is complete and outside
the aggregate locks.
"""

import threading
from typing import Dict, List, Optional

from internship_portal.core.errors import (
    AlreadyPlaced, InvalidTransition, NoCapacity, NotOwned, RuleViolation
)
from internship_portal.core.locking import aggregate_locks
from internship_portal.models.application import Application
from internship_portal.models.enums import (
    ACTIVE_APPLICATION_STATUSES, ApplicationStatus, InternshipStatus
)


class ApplicationLifecycle:

    def __init__(self, validator, slots, notifier, clock):
        self.validator = validator
        self.slots = slots
        self.notifier = notifier
        self.clock = clock
        self._applications: Dict[str, Application] = {}
        self._index_lock = threading.Lock()

    # ------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------

    def get(self, application_id: str) -> Optional[Application]:
        return self._applications.get(application_id)

    def all(self) -> List[Application]:
        with self._index_lock:
            return list(self._applications.values())

    # ------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------

    def submit(self, student, internship) -> Application:
        """
        Create a Pending application.

        Raises:
            RuleViolation: the first eligibility rule that failed; nothing is written
        """
        with aggregate_locks(students=[student], internships=[internship]):
            result = self.validator.can_apply(student, internship)
            if not result.ok:
                raise RuleViolation(result.reason)

            application = Application(student, internship, created_at=self.clock.now())
            internship.applications.append(application)
            student.applications.append(application)

        with self._index_lock:
            self._applications[application.application_id] = application

        self.notifier.new_application(application)
        return application

    # ------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------

    def set_status(self, application, new_status: ApplicationStatus, confirm_offer: bool = False) -> Application:
        """
        Move an application to `new_status`.

        confirm_offer=True is reserved for offer acceptance: the student is
        placed in a slot of the internship.

        Raises:
            InvalidTransition: unsupported source/target status
            NoCapacity: confirmed offer on an internship with no free slot
        """
        new_status = ApplicationStatus(new_status)
        with aggregate_locks(students=[application.student], internships=[application.internship]):
            self._apply_status(application, new_status, confirm_offer)

        if new_status == ApplicationStatus.successful and not confirm_offer:
            self.notifier.offer_awaiting_acceptance(application)
        return application

    def _apply_status(self, application, new_status: ApplicationStatus, confirm_offer: bool = False):
        # Caller holds the student and internship locks
        if new_status == ApplicationStatus.withdrawn:
            raise InvalidTransition("Applications are withdrawn through a withdrawal request.")
        if application.status == ApplicationStatus.withdrawn:
            raise InvalidTransition("A withdrawn application cannot change status.")
        if confirm_offer and new_status != ApplicationStatus.successful:
            raise InvalidTransition("Only a successful application can be confirmed into a slot.")

        if new_status in ACTIVE_APPLICATION_STATUSES and not application.is_active():
            self._check_reopen(application)

        student, internship = application.student, application.internship

        if new_status == ApplicationStatus.successful:
            if confirm_offer:
                self.slots.assign(internship, student)
                application.status = ApplicationStatus.successful
                if self.slots.is_full(internship):
                    self._fill(internship)
            else:
                application.status = ApplicationStatus.successful
        elif new_status == ApplicationStatus.unsuccessful:
            application.status = ApplicationStatus.unsuccessful
            self.slots.release(internship, student)
        else:
            application.status = ApplicationStatus.pending

    def _check_reopen(self, application):
        """An inactive application may only become active again within the rules."""
        student = application.student
        for other in student.applications:
            if (other is not application and other.internship is application.internship
                    and other.status != ApplicationStatus.unsuccessful):
                raise InvalidTransition("The student already has a live application for this internship.")
        if len(student.active_applications()) >= self.validator.max_active_applications:
            raise InvalidTransition(
                f"The student already has {self.validator.max_active_applications} active applications."
            )

    def _fill(self, internship):
        """Last slot taken: close the internship and reject the unplaced pool."""
        # Co-applicants' student locks are not held. Every writer of an
        # application's status also holds its internship lock, which we hold here.
        internship.status = InternshipStatus.filled
        internship.visible = False
        for other in internship.applications:
            if other.is_active() and internship.slot_of(other.student) is None:
                other.status = ApplicationStatus.unsuccessful

    # ------------------------------------------------------------
    # Offer acceptance
    # ------------------------------------------------------------

    def accept_placement(self, student, application) -> Application:
        """
        Accept an offer: every other live application of the student is
        marked Unsuccessful (releasing any slot), then this one is
        confirmed into a slot. The accepted-placement marker is set last.

        Raises:
            NotOwned: application belongs to someone else
            AlreadyPlaced: student already accepted a placement
            InvalidTransition: application is not Successful
            NoCapacity: no free slot left on the internship
        """
        if not student.owns(application):
            raise NotOwned("Application does not belong to student.")

        with student.lock:
            others = [a for a in student.applications if a is not application and a.is_active()]
            internships = [application.internship] + [a.internship for a in others]

            with aggregate_locks(students=[student], internships=internships):
                if student.has_accepted_placement():
                    raise AlreadyPlaced("You have already accepted a placement.")
                if application.status != ApplicationStatus.successful:
                    raise InvalidTransition("Only successful applications can be accepted.")

                target = application.internship
                if target.slot_of(student) is None and self.slots.is_full(target):
                    raise NoCapacity(f"Internship {target.title} has no free slots.")

                for other in others:
                    self._apply_status(other, ApplicationStatus.unsuccessful)
                self._apply_status(application, ApplicationStatus.successful, confirm_offer=True)
                student.accepted_placement = application

        return application
