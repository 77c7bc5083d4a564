"""
Withdrawal Service

A student may ask once per application to withdraw it. Career-center
staff resolve the request exactly once:

    approve -> request Withdrawn, application Withdrawn, slot released,
               internship re-opened (Approved + visible)
    reject  -> request Rejected, nothing else changes

Either way the request leaves the pending worklist.
"""

import threading
from typing import Dict, List, Optional

from internship_portal.core.errors import AlreadyRequested, InvalidTransition, NotOwned
from internship_portal.core.locking import aggregate_locks
from internship_portal.models.application import WithdrawalRequest
from internship_portal.models.enums import (
    ApplicationStatus, InternshipStatus, WithdrawalStatus
)


class WithdrawalWorkflow:

    def __init__(self, slots, notifier, clock):
        self.slots = slots
        self.notifier = notifier
        self.clock = clock
        self._requests: Dict[str, WithdrawalRequest] = {}
        self._pending: List[WithdrawalRequest] = []
        self._lock = threading.Lock()

    def get(self, request_id: str) -> Optional[WithdrawalRequest]:
        return self._requests.get(request_id)

    def pending(self) -> List[WithdrawalRequest]:
        with self._lock:
            return list(self._pending)

    def all(self) -> List[WithdrawalRequest]:
        with self._lock:
            return list(self._requests.values())

    def request(self, application, reason: str = "", requested_by=None) -> WithdrawalRequest:
        """
        Open a withdrawal request for an application.

        Args:
            application: the application to withdraw
            reason: free text from the student (trimmed)
            requested_by: the acting student, checked for ownership when given

        Raises:
            NotOwned: requested_by is not the applicant
            AlreadyRequested: the application already has a request
            InvalidTransition: the application is no longer active
        """
        if requested_by is not None and not requested_by.owns(application):
            raise NotOwned("Application does not belong to student.")

        with aggregate_locks(students=[application.student], internships=[application.internship]):
            if application.withdrawal_requested():
                raise AlreadyRequested("Withdrawal already requested.")
            if not application.is_active():
                raise InvalidTransition(f"Cannot withdraw an application that is {application.status.value}.")

            request = WithdrawalRequest(
                application=application,
                reason=(reason or "").strip(),
                requested_at=self.clock.now()
            )
            application.withdrawal_request = request

        with self._lock:
            self._requests[request.request_id] = request
            self._pending.append(request)

        self.notifier.withdrawal_requested(request)
        return request

    def resolve(self, request, staff, approve: bool) -> WithdrawalRequest:
        """
        Approve or reject a pending request. Resolution is final.

        Raises:
            InvalidTransition: the request was already resolved, or approval
                was asked for an application that is no longer active (the
                request stays pending and can still be rejected)
        """
        application = request.application
        internship = application.internship

        with aggregate_locks(students=[application.student], internships=[internship]):
            if request.is_resolved():
                raise InvalidTransition("Withdrawal request has already been resolved.")
            if approve and not application.is_active():
                raise InvalidTransition(
                    f"Cannot withdraw an application that is {application.status.value}."
                )

            request.resolved_by = staff
            request.resolved_at = self.clock.now()
            if approve:
                request.status = WithdrawalStatus.withdrawn
                application.status = ApplicationStatus.withdrawn
                if self.slots.release(internship, application.student) is not None:
                    internship.status = InternshipStatus.approved
                    internship.visible = True
            else:
                request.status = WithdrawalStatus.rejected

        with self._lock:
            if request in self._pending:
                self._pending.remove(request)

        return request
