"""
Career Center Staff Routes

GET /staff/internships/pending - Internships awaiting review
PUT /staff/internships/{id}/decision - Approve or reject an internship
PUT /staff/applications/{id}/status - Update application status
GET /staff/withdrawals - Pending withdrawal requests
PUT /staff/withdrawals/{id} - Approve or reject a withdrawal
GET /staff/account-requests - Representative account requests
PUT /staff/account-requests/{id} - Approve or reject a representative account
POST /staff/reminders - Send myself a workload reminder
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from internship_portal.api.lookups import (
    find_account_request, find_application, find_internship, find_withdrawal
)
from internship_portal.core.actors import get_current_staff, get_engine_dependency
from internship_portal.services.engine import PlacementEngine
from internship_portal.schemas.schemas import (
    AccountDecision, AccountRequestResponse, ApplicationResponse, ApplicationStatusUpdate,
    InternshipDecision, InternshipResponse, MessageResponse, WithdrawalDecision, WithdrawalResponse
)

router = APIRouter(prefix="/staff", tags=["Career Center Staff"])


@router.get("/internships/pending", response_model=List[InternshipResponse])
async def get_pending_internships(
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Internships submitted by representatives and not yet reviewed."""
    return [InternshipResponse.from_entity(i) for i in engine.catalog.pending_review()]


@router.put("/internships/{internship_id}/decision", response_model=InternshipResponse)
async def decide_internship(
    internship_id: str,
    decision: InternshipDecision,
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Approve (visible to students) or reject (terminal) a pending internship."""
    internship = find_internship(engine, internship_id)
    if decision.approve:
        engine.catalog.approve(internship, staff)
    else:
        engine.catalog.reject(internship, staff)
    engine.persist(internship)
    return InternshipResponse.from_entity(internship)


@router.put("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Update status of any application."""
    application = find_application(engine, application_id)
    engine.applications.set_status(application, update.status)
    engine.persist(application.internship, *application.internship.applications)
    return ApplicationResponse.from_entity(application)


@router.get("/withdrawals", response_model=List[WithdrawalResponse])
async def get_pending_withdrawals(
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Withdrawal requests awaiting a decision."""
    return [WithdrawalResponse.from_entity(r) for r in engine.withdrawals.pending()]


@router.put("/withdrawals/{request_id}", response_model=WithdrawalResponse)
async def decide_withdrawal(
    request_id: str,
    decision: WithdrawalDecision,
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Approve (application withdrawn, slot released) or reject a withdrawal request."""
    request = find_withdrawal(engine, request_id)
    engine.withdrawals.resolve(request, staff, decision.approve)
    engine.persist(request, request.application, request.application.internship)
    return WithdrawalResponse.from_entity(request)


@router.get("/account-requests", response_model=List[AccountRequestResponse])
async def get_account_requests(
    status: Optional[str] = Query("Pending", description="Pending, Approved, Rejected or ALL"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50),
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Representative account requests, filtered by status and paginated."""
    requests = engine.accounts.pending(page=page, page_size=page_size, status_filter=status)
    return [AccountRequestResponse.from_entity(r) for r in requests]


@router.put("/account-requests/{request_id}", response_model=AccountRequestResponse)
async def decide_account_request(
    request_id: str,
    decision: AccountDecision,
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Approve or reject a representative account."""
    request = find_account_request(engine, request_id)
    if decision.approve:
        engine.accounts.approve(request, staff)
    else:
        engine.accounts.reject(request, staff, decision.notes)
    engine.persist(request)
    return AccountRequestResponse.from_entity(request)


@router.post("/reminders", response_model=MessageResponse)
async def send_workload_reminder(
    staff=Depends(get_current_staff),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Queue a reminder of outstanding reviews in the staff member's inbox."""
    engine.workload_reminder(staff)
    return MessageResponse(message="Reminder sent")
