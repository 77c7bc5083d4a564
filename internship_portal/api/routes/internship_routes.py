"""
Internship Routes (public listing)

GET /internships - Visible internships, optionally filtered
GET /internships/{id} - Internship details
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from internship_portal.api.lookups import find_internship
from internship_portal.core.actors import get_engine_dependency
from internship_portal.models.enums import InternshipLevel
from internship_portal.services.engine import PlacementEngine
from internship_portal.schemas.schemas import InternshipResponse

router = APIRouter(prefix="/internships", tags=["Internships"])


@router.get("", response_model=List[InternshipResponse])
async def list_internships(
    level: Optional[InternshipLevel] = None,
    major: Optional[str] = None,
    company: Optional[str] = Query(None, description="Company name (partial match)"),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """
    List internships currently visible to students.

    Filters:
    - level: Basic / Intermediate / Advanced
    - major: only internships open to this major
    - company: company name (case-insensitive partial match)
    """
    internships = engine.catalog.visible()

    if level:
        internships = [i for i in internships if i.level == level]
    if major:
        internships = [i for i in internships if i.accepts_major(major)]
    if company:
        needle = company.casefold()
        internships = [i for i in internships if needle in i.company_name.casefold()]

    return [InternshipResponse.from_entity(i) for i in internships]


@router.get("/{internship_id}", response_model=InternshipResponse)
async def get_internship(
    internship_id: str,
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Get internship details."""
    return InternshipResponse.from_entity(find_internship(engine, internship_id))
