"""
Account Service - company representative account requests.

Each representative gets one request when they sign up. Staff resolve it
once (Approved or Rejected); the representative's `approved` flag follows
the decision. Resolution is final.
"""

import threading
from typing import List, Optional

from internship_portal.core.errors import InvalidTransition, NotOwned
from internship_portal.models.account_request import AccountRequest
from internship_portal.models.enums import AccountRequestStatus

DEFAULT_PAGE_SIZE = 10


class AccountRequestWorkflow:

    def __init__(self, notifier, clock):
        self.notifier = notifier
        self.clock = clock
        self._requests: List[AccountRequest] = []
        self._lock = threading.Lock()

    def open(self, rep) -> AccountRequest:
        """
        Record a representative's account request. Pre-approved
        representatives get an already-approved request.
        """
        request = AccountRequest(representative=rep, submitted_at=self.clock.now())
        if rep.approved:
            request.status = AccountRequestStatus.approved
            request.decided_at = request.submitted_at
        with self._lock:
            self._requests.append(request)
        if not rep.approved:
            self.notifier.account_requested(rep)
        return request

    def get(self, request_id: str) -> Optional[AccountRequest]:
        with self._lock:
            for request in self._requests:
                if request.request_id == request_id:
                    return request
        return None

    def latest_for(self, rep) -> Optional[AccountRequest]:
        with self._lock:
            for request in reversed(self._requests):
                if request.representative is rep:
                    return request
        return None

    def pending(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE,
                status_filter: Optional[str] = AccountRequestStatus.pending.value) -> List[AccountRequest]:
        """Page through requests; status_filter "ALL" returns every request."""
        page = max(page, 1)
        if page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        wanted = (status_filter or AccountRequestStatus.pending.value).strip()

        with self._lock:
            matches = [
                r for r in self._requests
                if wanted.upper() == "ALL" or r.status.value.lower() == wanted.lower()
            ]
        start = (page - 1) * page_size
        return matches[start:start + page_size]

    def approve(self, request: AccountRequest, staff) -> AccountRequest:
        self._resolve(request, staff, AccountRequestStatus.approved)
        request.representative.approved = True
        self.notifier.account_decision(request.representative, approved=True)
        return request

    def reject(self, request: AccountRequest, staff, notes: Optional[str] = None) -> AccountRequest:
        self._resolve(request, staff, AccountRequestStatus.rejected, notes)
        request.representative.approved = False
        self.notifier.account_decision(request.representative, approved=False, notes=notes)
        return request

    def _resolve(self, request, staff, status, notes=None):
        if staff is None or getattr(staff, "role", None) != "staff":
            raise NotOwned("Only career center staff may resolve account requests.")
        with self._lock:
            if request.is_resolved():
                raise InvalidTransition("Account request has already been resolved.")
            request.status = status
            request.approver = staff
            request.decision_notes = notes
            request.decided_at = self.clock.now()
