"""
Notification service - per-user feed reads and read-flag updates.
Rows are only ever created by the swap service.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from skillswap.core.exceptions import ForbiddenError, InternalError, NotFoundError
from skillswap.db.models.notification import Notification
from skillswap.db.repositories.notification_repository import NotificationRepository
from skillswap.db.session import unit_of_work
from skillswap.schemas.notification import NotificationResponse

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


def parse_limit(raw: str | int | None, default: int = DEFAULT_LIMIT) -> int:
    """Positive integer from the query string; anything else falls back to ``default``."""
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value > 0 else default


def format_timestamp(value: datetime) -> str:
    """``Oct 19, 2026, 03:45 PM`` style display string (UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return f"{value:%b} {value.day}, {value.year}, {value:%I:%M %p}"


def _to_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        related_id=notification.related_id,
        time=format_timestamp(notification.created_at),
        read=bool(notification.is_read),
    )


class NotificationService:
    def __init__(self, notification_repo: NotificationRepository):
        self.notification_repo = notification_repo
        self.session = notification_repo.session

    async def list_notifications(self, *, user_id: int, limit: int = DEFAULT_LIMIT) -> list[NotificationResponse]:
        """Newest first. Read and unread rows are both returned."""
        rows = await self.notification_repo.list_for_user(user_id, limit=limit)
        return [_to_response(n) for n in rows]

    async def mark_read(self, *, user_id: int, notification_id: int) -> None:
        """Set the read flag. Marking an already-read notification again is a no-op."""
        try:
            async with unit_of_work(self.session):
                notification = await self.notification_repo.get_by_id(notification_id)
                if notification is None:
                    raise NotFoundError("Notification not found")
                if notification.user_id != user_id:
                    raise ForbiddenError("Not authorized")
                notification.is_read = True
        except SQLAlchemyError as exc:
            logger.exception("Failed to mark notification %s read", notification_id)
            raise InternalError("Failed to mark notification as read") from exc

    async def mark_all_read(self, *, user_id: int) -> int:
        try:
            async with unit_of_work(self.session):
                updated = await self.notification_repo.mark_all_read(user_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to mark notifications read for user %s", user_id)
            raise InternalError("Failed to mark notifications as read") from exc
        logger.debug("Marked %d notifications read for user %s", updated, user_id)
        return updated
