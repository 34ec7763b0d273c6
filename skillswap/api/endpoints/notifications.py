"""
Notification endpoints - feed, mark one read, mark all read.
"""

from fastapi import APIRouter

from skillswap.core.dependencies import AppSettings, CurrentUserId
from skillswap.db.repositories.notification_repository import NotificationRepository
from skillswap.db.session import DbSession
from skillswap.schemas.common import MessageResponse
from skillswap.schemas.notification import MarkAllReadResponse, NotificationResponse
from skillswap.services.notification_service import NotificationService, parse_limit

router = APIRouter()


def _get_notification_service(session: DbSession) -> NotificationService:
    return NotificationService(NotificationRepository(session))


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    session: DbSession,
    settings: AppSettings,
    user_id: CurrentUserId,
    limit: str | None = None,
):
    """Newest first. A missing, non-numeric or non-positive limit means the default (50)."""
    return await _get_notification_service(session).list_notifications(
        user_id=user_id, limit=parse_limit(limit, settings.default_notification_limit)
    )


@router.put("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(session: DbSession, user_id: CurrentUserId):
    updated = await _get_notification_service(session).mark_all_read(user_id=user_id)
    return MarkAllReadResponse(message="All notifications marked as read", updated=updated)


@router.put("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(session: DbSession, notification_id: int, user_id: CurrentUserId):
    await _get_notification_service(session).mark_read(user_id=user_id, notification_id=notification_id)
    return MessageResponse(message="Notification marked as read")
