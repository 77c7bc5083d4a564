"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from internship_portal.api.routes.internship_routes import router as internship_router
from internship_portal.api.routes.student_routes import router as student_router
from internship_portal.api.routes.company_routes import router as company_router
from internship_portal.api.routes.staff_routes import router as staff_router
from internship_portal.api.routes.notification_routes import router as notification_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(internship_router)
api_router.include_router(student_router)
api_router.include_router(company_router)
api_router.include_router(staff_router)
api_router.include_router(notification_router)
