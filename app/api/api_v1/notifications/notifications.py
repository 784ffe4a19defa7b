# =====================================================
# FILE: app/api/api_v1/notifications/notifications.py
# Notification inbox for the current user
# =====================================================

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from app.core.dependencies import get_current_user, get_notification_service
from app.models.user import User
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


class NotificationResponse(BaseModel):
    id: str
    type: str
    title: str
    message: Optional[str] = None
    link: Optional[str] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    total: int
    unread_count: int
    items: List[NotificationResponse]


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    unread_only: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Newest first"""
    notifications = service.list_for_user(current_user.id, unread_only=unread_only)
    return NotificationListResponse(
        total=len(notifications),
        unread_count=service.unread_count(current_user.id),
        items=[NotificationResponse.model_validate(n) for n in notifications]
    )


@router.post("/read-all")
async def mark_all_read(
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    updated = service.mark_all_as_read(current_user.id)
    return {"success": True, "updated": updated}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    # Another user's notification is reported as missing
    return service.mark_as_read(notification_id, user_id=current_user.id)
