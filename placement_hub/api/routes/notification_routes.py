"""
Notification Routes

GET /notifications - Own notifications, newest first
GET /notifications/unread-count - Number of unread notifications
PATCH /notifications/read-all - Mark all own notifications read
PATCH /notifications/{notification_id}/read - Mark one read (recipient only)
"""

from fastapi import APIRouter, Depends, Query

from placement_hub.core.auth import Identity, get_current_user
from placement_hub.services.notification_service import NotificationService
from placement_hub.schemas.schemas import CountResponse, NotificationListResponse, NotificationResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    unread_only: bool = Query(False),
    user: Identity = Depends(get_current_user)
):
    notifications = NotificationService().list_for(user.id, unread_only=unread_only)
    return NotificationListResponse(notifications=notifications)


@router.get("/unread-count", response_model=CountResponse)
async def unread_count(user: Identity = Depends(get_current_user)):
    return CountResponse(count=NotificationService().unread_count(user.id))


@router.patch("/read-all", response_model=CountResponse)
async def mark_all_read(user: Identity = Depends(get_current_user)):
    updated = NotificationService().mark_all_read(user)
    return CountResponse(message="All notifications marked as read", count=updated)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(notification_id: str, user: Identity = Depends(get_current_user)):
    notification = NotificationService().mark_read(user, notification_id)
    return NotificationResponse(notification=notification)
