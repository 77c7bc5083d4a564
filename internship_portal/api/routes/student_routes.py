"""
Student Routes

GET /students/internships - Internships the student may apply to
POST /students/applications - Apply to an internship
GET /students/applications - Get my applications
POST /students/applications/{id}/accept - Accept an offer
POST /students/applications/{id}/withdrawal - Request withdrawal
"""

from fastapi import APIRouter, Depends
from typing import List

from internship_portal.api.lookups import find_application, find_internship
from internship_portal.core.actors import get_current_student, get_engine_dependency
from internship_portal.services.engine import PlacementEngine
from internship_portal.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, InternshipResponse,
    WithdrawalCreate, WithdrawalResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/internships", response_model=List[InternshipResponse])
async def list_eligible_internships(
    student=Depends(get_current_student),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Visible internships that pass every eligibility rule for this student."""
    internships = engine.catalog.eligible_for(student, engine.validator)
    return [InternshipResponse.from_entity(i) for i in internships]


@router.post("/applications", response_model=ApplicationResponse, status_code=201)
async def apply(
    data: ApplicationCreate,
    student=Depends(get_current_student),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Apply to an internship. Fails with the first eligibility rule that is not met."""
    internship = find_internship(engine, data.internship_id)
    application = engine.applications.submit(student, internship)
    engine.persist(application)
    return ApplicationResponse.from_entity(application)


@router.get("/applications", response_model=List[ApplicationResponse])
async def get_my_applications(student=Depends(get_current_student)):
    """All of the student's applications, newest first."""
    applications = sorted(student.applications, key=lambda a: a.created_at, reverse=True)
    return [ApplicationResponse.from_entity(a) for a in applications]


@router.post("/applications/{application_id}/accept", response_model=ApplicationResponse)
async def accept_offer(
    application_id: str,
    student=Depends(get_current_student),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Accept a successful application. All other live applications become unsuccessful."""
    application = find_application(engine, application_id)
    engine.applications.accept_placement(student, application)

    touched = {a.internship.internship_id: a.internship for a in student.applications}
    engine.persist(*student.applications)
    for internship in touched.values():
        engine.persist(internship, *internship.applications)
    return ApplicationResponse.from_entity(application)


@router.post("/applications/{application_id}/withdrawal", response_model=WithdrawalResponse, status_code=201)
async def request_withdrawal(
    application_id: str,
    data: WithdrawalCreate,
    student=Depends(get_current_student),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Ask the career center to withdraw an application. One request per application."""
    application = find_application(engine, application_id)
    request = engine.withdrawals.request(application, data.reason or "", requested_by=student)
    engine.persist(request)
    return WithdrawalResponse.from_entity(request)
