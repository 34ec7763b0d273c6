"""
Notification repository - per-user feed reads and read-flag updates.
"""

from sqlalchemy import select, update

from skillswap.db.models.notification import Notification
from skillswap.db.repositories.base_repository import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, session):
        super().__init__(session, Notification)

    async def list_for_user(self, user_id: int, *, limit: int) -> list[Notification]:
        result = await self.session.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def mark_all_read(self, user_id: int) -> int:
        """Set the read flag on all of the user's unread notifications. Returns rows changed."""
        result = await self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
