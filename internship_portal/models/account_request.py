"""
Company representative account request, resolved once by staff.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from internship_portal.core.clock import utc_now
from internship_portal.models.enums import AccountRequestStatus


@dataclass(eq=False)
class AccountRequest:
    representative: "CompanyRep"
    submitted_at: datetime = field(default_factory=utc_now)
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: AccountRequestStatus = AccountRequestStatus.pending
    approver: Optional["CareerCenterStaff"] = None
    decided_at: Optional[datetime] = None
    decision_notes: Optional[str] = None

    def is_resolved(self) -> bool:
        return self.status != AccountRequestStatus.pending
