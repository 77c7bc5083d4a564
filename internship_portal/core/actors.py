"""
Actor resolution for API routes.

Provides FastAPI dependencies that turn the `X-User-ID` header into the
acting Student, CompanyRep or CareerCenterStaff. Credential checks live
in front of this service and are not repeated here.
"""

from fastapi import Depends, Header, HTTPException, status

from internship_portal.services.engine import PlacementEngine, get_placement_engine


def get_engine_dependency() -> PlacementEngine:
    """Dependency - the process-wide placement engine (overridable in tests)."""
    return get_placement_engine()


async def get_current_user(
    x_user_id: str = Header(..., alias="X-User-ID"),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """
    FastAPI dependency - Get the acting user.

    Usage:
        @router.get("/me")
        async def route(user=Depends(get_current_user)):
            return user
    """
    user = engine.directory.get(x_user_id.strip())
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user"
        )
    return user


async def get_current_student(user=Depends(get_current_user)):
    """Dependency - Require student role."""
    if user.role != "student":
        raise HTTPException(status_code=403, detail="Students only")
    return user


async def get_current_rep(user=Depends(get_current_user)):
    """Dependency - Require company representative role."""
    if user.role != "company":
        raise HTTPException(status_code=403, detail="Company representatives only")
    return user


async def get_current_staff(user=Depends(get_current_user)):
    """Dependency - Require career center staff role."""
    if user.role != "staff":
        raise HTTPException(status_code=403, detail="Career center staff only")
    return user
