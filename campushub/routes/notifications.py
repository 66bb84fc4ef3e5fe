"""
Notification Endpoints
Signed-in member's notifications
"""

from fastapi import APIRouter, Depends, Query

from campushub.auth import get_current_user
from campushub.deps import get_notification_service
from campushub.exceptions import NotFoundError
from campushub.schemas.notification import NotificationResponse
from campushub.services.notification_service import NotificationService

router = APIRouter()


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    unread_only: bool = Query(False),
    current_user: dict = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """List notifications, newest first"""
    return await notification_service.list_for_user(current_user["user_id"], unread_only=unread_only)


@router.post("/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    current_user: dict = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """Mark one notification as read"""
    if not await notification_service.mark_read(notification_id, current_user["user_id"]):
        raise NotFoundError("Notification not found")
    return {"success": True}
