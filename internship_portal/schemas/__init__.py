"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: Internal domain entities the engine mutates
- Schemas: API contract (what client sends/receives)
"""
from internship_portal.schemas.schemas import (
    InternshipCreate, InternshipResponse, ApplicationResponse,
    WithdrawalResponse, AccountRequestResponse, MessageResponse
)

__all__ = [
    "InternshipCreate",
    "InternshipResponse",
    "ApplicationResponse",
    "WithdrawalResponse",
    "AccountRequestResponse",
    "MessageResponse",
]
