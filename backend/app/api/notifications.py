"""Notification API endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_store
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationCheckResponse,
    NotificationResponse,
)
from app.services.notifications import run_notification_check
from app.services.record_store import SqlRecordStore

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
def get_notifications(
    unread_only: bool = False,
    store: SqlRecordStore = Depends(get_store),
):
    """Get notifications, newest first."""
    notifications = store.list_notifications()
    if unread_only:
        notifications = [n for n in notifications if not n.read]
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(store: SqlRecordStore = Depends(get_store)):
    """Mark every notification as read."""
    return MarkAllReadResponse(updated=store.mark_all_notifications_read())


@router.post("/check", response_model=NotificationCheckResponse)
def run_check(store: SqlRecordStore = Depends(get_store)):
    """Run the expiry check over all employees now."""
    created = run_notification_check(store)
    return NotificationCheckResponse(
        created=len(created),
        notifications=[NotificationResponse.model_validate(n) for n in created],
    )


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: str,
    store: SqlRecordStore = Depends(get_store),
):
    """Mark a notification as read."""
    notification = store.mark_notification_read(notification_id)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return NotificationResponse.model_validate(notification)
