"""
Notification Routes

GET /notifications - Read my inbox (consumed unless peek=true)
"""

from fastapi import APIRouter, Depends, Query

from internship_portal.core.actors import get_current_user, get_engine_dependency
from internship_portal.services.engine import PlacementEngine
from internship_portal.schemas.schemas import NotificationListResponse, NotificationResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
async def get_notifications(
    peek: bool = Query(False, description="Leave the messages in the inbox"),
    user=Depends(get_current_user),
    engine: PlacementEngine = Depends(get_engine_dependency)
):
    """Messages for the current user, oldest first."""
    if peek:
        notifications = engine.sink.peek(user.user_id)
    else:
        notifications = engine.sink.consume(user.user_id)

    return NotificationListResponse(
        notifications=[
            NotificationResponse(message=n.message, created_at=n.created_at) for n in notifications
        ],
        total=len(notifications)
    )
