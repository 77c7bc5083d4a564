"""
Application and its one-shot withdrawal request.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from internship_portal.core.clock import utc_now
from internship_portal.models.enums import (
    ACTIVE_APPLICATION_STATUSES, ApplicationStatus, WithdrawalStatus
)


@dataclass(eq=False)
class Application:
    """A student's application to one internship. Both references are fixed."""

    student: "Student"
    internship: "Internship"
    application_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: ApplicationStatus = ApplicationStatus.pending
    created_at: datetime = field(default_factory=utc_now)
    withdrawal_request: Optional["WithdrawalRequest"] = field(default=None, repr=False)

    def is_active(self) -> bool:
        return self.status in ACTIVE_APPLICATION_STATUSES

    def holds_slot(self) -> bool:
        return self.internship.slot_of(self.student) is not None

    def withdrawal_requested(self) -> bool:
        return self.withdrawal_request is not None


@dataclass(eq=False)
class WithdrawalRequest:
    application: Application
    reason: str = ""
    requested_at: datetime = field(default_factory=utc_now)
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: WithdrawalStatus = WithdrawalStatus.pending
    resolved_by: Optional["CareerCenterStaff"] = None
    resolved_at: Optional[datetime] = None

    @property
    def student(self):
        return self.application.student

    def is_resolved(self) -> bool:
        return self.status != WithdrawalStatus.pending
