"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import date, datetime

from internship_portal.models.enums import (
    ApplicationStatus, InternshipLevel, InternshipStatus, WithdrawalStatus, AccountRequestStatus
)
from internship_portal.models.internship import MAX_SLOTS


# ============================================================
# INTERNSHIP SCHEMAS
# ============================================================

class InternshipCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    level: InternshipLevel = InternshipLevel.basic
    preferred_major: Optional[str] = Field(None, max_length=100)
    open_date: Optional[date] = None
    close_date: Optional[date] = None
    slot_count: int = Field(1, ge=1, le=MAX_SLOTS)

    @model_validator(mode="after")
    def check_dates(self):
        if self.open_date and self.close_date and self.close_date < self.open_date:
            raise ValueError("Closing date cannot be earlier than the opening date.")
        return self

class VisibilityUpdate(BaseModel):
    visible: bool

class InternshipDecision(BaseModel):
    approve: bool

class InternshipResponse(BaseModel):
    internship_id: str
    title: str
    description: Optional[str] = None
    level: InternshipLevel
    preferred_major: Optional[str] = None
    open_date: Optional[date] = None
    close_date: Optional[date] = None
    status: InternshipStatus
    visible: bool
    company_name: str
    rep_id: str
    total_slots: int
    filled_slots: int
    created_at: datetime

    @classmethod
    def from_entity(cls, internship) -> "InternshipResponse":
        return cls(
            internship_id=internship.internship_id, title=internship.title,
            description=internship.description, level=internship.level,
            preferred_major=internship.preferred_major, open_date=internship.open_date,
            close_date=internship.close_date, status=internship.status, visible=internship.visible,
            company_name=internship.company_name, rep_id=internship.representative.user_id,
            total_slots=len(internship.slots), filled_slots=internship.filled_slot_count(),
            created_at=internship.created_at
        )


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    internship_id: str

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    application_id: str
    student_id: str
    student_name: str
    internship_id: str
    internship_title: str
    company_name: str
    status: ApplicationStatus
    holds_slot: bool
    withdrawal_status: Optional[WithdrawalStatus] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, application) -> "ApplicationResponse":
        request = application.withdrawal_request
        return cls(
            application_id=application.application_id,
            student_id=application.student.user_id, student_name=application.student.name,
            internship_id=application.internship.internship_id,
            internship_title=application.internship.title,
            company_name=application.internship.company_name,
            status=application.status, holds_slot=application.holds_slot(),
            withdrawal_status=request.status if request else None,
            created_at=application.created_at
        )


# ============================================================
# WITHDRAWAL SCHEMAS
# ============================================================

class WithdrawalCreate(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)

class WithdrawalDecision(BaseModel):
    approve: bool

class WithdrawalResponse(BaseModel):
    request_id: str
    application_id: str
    student_id: str
    internship_title: str
    reason: str
    status: WithdrawalStatus
    requested_at: datetime
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, request) -> "WithdrawalResponse":
        return cls(
            request_id=request.request_id, application_id=request.application.application_id,
            student_id=request.student.user_id,
            internship_title=request.application.internship.title,
            reason=request.reason, status=request.status, requested_at=request.requested_at,
            resolved_by=request.resolved_by.user_id if request.resolved_by else None,
            resolved_at=request.resolved_at
        )


# ============================================================
# ACCOUNT REQUEST SCHEMAS
# ============================================================

class AccountDecision(BaseModel):
    approve: bool
    notes: Optional[str] = Field(None, max_length=500)

class AccountRequestResponse(BaseModel):
    request_id: str
    rep_id: str
    rep_name: str
    company_name: str
    status: AccountRequestStatus
    submitted_at: datetime
    approver_id: Optional[str] = None
    decided_at: Optional[datetime] = None
    decision_notes: Optional[str] = None

    @classmethod
    def from_entity(cls, request) -> "AccountRequestResponse":
        rep = request.representative
        return cls(
            request_id=request.request_id, rep_id=rep.user_id, rep_name=rep.name,
            company_name=rep.company_name, status=request.status,
            submitted_at=request.submitted_at,
            approver_id=request.approver.user_id if request.approver else None,
            decided_at=request.decided_at, decision_notes=request.decision_notes
        )


# ============================================================
# NOTIFICATION SCHEMAS
# ============================================================

class NotificationResponse(BaseModel):
    message: str
    created_at: datetime

class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    total: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
