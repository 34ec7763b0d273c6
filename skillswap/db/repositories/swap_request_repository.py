"""
Swap request repository - pending-pair lookups and the per-user listing join.
"""

from enum import StrEnum

from sqlalchemy import or_, select, update
from sqlalchemy.orm import aliased

from skillswap.db.base import utc_now
from skillswap.db.models.swap_request import SwapRequest, SwapStatus
from skillswap.db.models.user import User
from skillswap.db.repositories.base_repository import BaseRepository


class SwapDirection(StrEnum):
    ALL = "all"
    SENT = "sent"
    RECEIVED = "received"


class SwapRequestRepository(BaseRepository[SwapRequest]):
    def __init__(self, session):
        super().__init__(session, SwapRequest)

    async def find_pending(self, requester_id: int, recipient_id: int) -> SwapRequest | None:
        """Pending request for the exact ordered pair, if any."""
        result = await self.session.execute(
            select(SwapRequest).where(
                SwapRequest.requester_id == requester_id,
                SwapRequest.recipient_id == recipient_id,
                SwapRequest.status == SwapStatus.PENDING,
            )
        )
        return result.scalars().first()

    async def transition(self, swap: SwapRequest, status: SwapStatus) -> bool:
        """Move a pending request to ``status``. False when it was no longer pending."""
        result = await self.session.execute(
            update(SwapRequest)
            .where(SwapRequest.id == swap.id, SwapRequest.status == SwapStatus.PENDING)
            .values(status=status, updated_at=utc_now())
        )
        return result.rowcount == 1

    async def list_for_user(
        self, user_id: int, direction: SwapDirection = SwapDirection.ALL
    ) -> list[tuple[SwapRequest, User, User]]:
        """Requests involving the user with both participants, newest first."""
        requester = aliased(User, name="requester")
        recipient = aliased(User, name="recipient")
        stmt = (
            select(SwapRequest, requester, recipient)
            .join(requester, SwapRequest.requester_id == requester.id)
            .join(recipient, SwapRequest.recipient_id == recipient.id)
        )
        if direction == SwapDirection.SENT:
            stmt = stmt.where(SwapRequest.requester_id == user_id)
        elif direction == SwapDirection.RECEIVED:
            stmt = stmt.where(SwapRequest.recipient_id == user_id)
        else:
            stmt = stmt.where(
                or_(SwapRequest.requester_id == user_id, SwapRequest.recipient_id == user_id)
            )
        stmt = stmt.order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]
