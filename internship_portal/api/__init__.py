"""
API module - FastAPI routers and endpoint definitions.

Contains:
- Main API router that combines all sub-routers
- Route handlers per actor (students, company representatives, staff)
- Id lookups shared by the handlers

Usage:
    from internship_portal.api import api_router
    app.include_router(api_router)
"""

from internship_portal.api.routes import api_router

__all__ = ["api_router"]
