"""
Company Routes

POST /companies/internships - Create internship (submitted for review)
GET /companies/internships - Get own internships
PUT /companies/internships/{id}/visibility - Show/hide an internship
GET /companies/internships/{id}/applications - Applications received
PUT /companies/applications/{id}/status - Update application status
"""

from fastapi import APIRouter, Depends
from typing import List

from internship_portal.api.lookups import find_application, find_internship
from internship_portal.core.actors import get_current_rep, get_engine_dependency
from internship_portal.core.errors import NotOwned, Unapproved
from internship_portal.services.engine import PlacementEngine
from internship_portal.schemas.schemas import (
    ApplicationResponse, ApplicationStatusUpdate, InternshipCreate,
    InternshipResponse, VisibilityUpdate
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/internships", response_model=InternshipResponse, status_code=201)
async def create_internship(
    data: InternshipCreate,
    rep=Depends(get_current_rep),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Create an internship. It stays hidden until the career center approves it."""
    internship = engine.catalog.create(
        rep, data.title, data.description, data.level,
        preferred_major=data.preferred_major, open_date=data.open_date,
        close_date=data.close_date, slot_count=data.slot_count
    )
    engine.persist(internship)
    return InternshipResponse.from_entity(internship)


@router.get("/internships", response_model=List[InternshipResponse])
async def get_company_internships(
    rep=Depends(get_current_rep),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Get all internships posted by this representative."""
    return [InternshipResponse.from_entity(i) for i in engine.catalog.for_representative(rep)]


@router.put("/internships/{internship_id}/visibility", response_model=InternshipResponse)
async def update_visibility(
    internship_id: str,
    update: VisibilityUpdate,
    rep=Depends(get_current_rep),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Toggle visibility. Turning on a pending internship approves it."""
    internship = find_internship(engine, internship_id)
    engine.catalog.toggle_visibility(rep, internship, update.visible)
    engine.persist(internship)
    return InternshipResponse.from_entity(internship)


@router.get("/internships/{internship_id}/applications", response_model=List[ApplicationResponse])
async def get_applications(
    internship_id: str,
    rep=Depends(get_current_rep),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Get all applications received for one of this representative's internships."""
    internship = find_internship(engine, internship_id)
    applications = engine.catalog.applications_for(rep, internship)
    return [ApplicationResponse.from_entity(a) for a in applications]


@router.put("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    rep=Depends(get_current_rep),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Update status of an application to one of this representative's internships."""
    application = find_application(engine, application_id)
    if application.internship.representative is not rep:
        raise NotOwned("Application is not for an internship managed by this representative.")
    if not rep.approved:
        raise Unapproved("Company representative has not been approved yet.")

    engine.applications.set_status(application, update.status)
    engine.persist(application.internship, *application.internship.applications)
    return ApplicationResponse.from_entity(application)
