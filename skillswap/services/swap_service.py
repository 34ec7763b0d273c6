"""
Swap service - the swap-request lifecycle and the notifications it produces.

States: pending (initial) -> accepted | rejected (recipient) | cancelled (requester).
Terminal states never change again. Each transition and its side effects
(notification row, completed-swap counters) commit together or not at all.
This service is the only writer of notification rows.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from skillswap.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
)
from skillswap.core.metrics import SWAP_TRANSITIONS
from skillswap.db.models.notification import Notification, NotificationType
from skillswap.db.models.swap_request import SwapRequest, SwapStatus
from skillswap.db.models.user import User
from skillswap.db.repositories.notification_repository import NotificationRepository
from skillswap.db.repositories.profile_repository import ProfileRepository
from skillswap.db.repositories.swap_request_repository import SwapDirection, SwapRequestRepository
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import unit_of_work
from skillswap.schemas.swap import SwapRequestResponse

logger = logging.getLogger(__name__)

NEW_REQUEST_TITLE = "New Swap Request"
NEW_REQUEST_MESSAGE = "{name} wants to swap skills with you"

# (type, title, message) sent to the requester for each recipient decision
RESPONSE_NOTIFICATIONS: dict[SwapStatus, tuple[NotificationType, str, str]] = {
    SwapStatus.ACCEPTED: (
        NotificationType.SWAP_ACCEPTED,
        "Swap Request Accepted",
        "Your swap request has been accepted!",
    ),
    SwapStatus.REJECTED: (
        NotificationType.SWAP_REJECTED,
        "Swap Request Rejected",
        "Your swap request has been rejected.",
    ),
}


def _to_response(swap: SwapRequest, requester: User, recipient: User) -> SwapRequestResponse:
    return SwapRequestResponse(
        id=swap.id,
        status=swap.status,
        message=swap.message,
        created_at=swap.created_at,
        requester_id=swap.requester_id,
        recipient_id=swap.recipient_id,
        requester_name=requester.name,
        requester_photo=requester.profile_photo,
        recipient_name=recipient.name,
        recipient_photo=recipient.profile_photo,
    )


class SwapService:
    def __init__(
        self,
        swap_repo: SwapRequestRepository,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
        notification_repo: NotificationRepository,
    ):
        self.swap_repo = swap_repo
        self.user_repo = user_repo
        self.profile_repo = profile_repo
        self.notification_repo = notification_repo
        self.session = swap_repo.session

    async def create_request(self, *, requester_id: int, recipient_id: int, message: str) -> SwapRequest:
        """Open a pending request and notify the recipient."""
        if requester_id == recipient_id:
            raise BadRequestError("You cannot request a swap with yourself")

        try:
            async with unit_of_work(self.session):
                recipient = await self.user_repo.get_by_id(recipient_id)
                if recipient is None:
                    raise NotFoundError("Recipient not found")
                # Serialises concurrent creates from the same requester
                requester = await self.user_repo.get_by_id(requester_id, for_update=True)
                if requester is None:
                    raise NotFoundError("Requester not found")
                if await self.swap_repo.find_pending(requester_id, recipient_id) is not None:
                    raise ConflictError("Swap request already sent")

                swap = await self.swap_repo.add(
                    SwapRequest(
                        requester_id=requester_id,
                        recipient_id=recipient_id,
                        message=message,
                        status=SwapStatus.PENDING,
                    )
                )
                await self.notification_repo.add(
                    Notification(
                        user_id=recipient_id,
                        type=NotificationType.SWAP_REQUEST,
                        title=NEW_REQUEST_TITLE,
                        message=NEW_REQUEST_MESSAGE.format(name=requester.name or "Someone"),
                        related_id=swap.id,
                    )
                )
        except IntegrityError as exc:
            # The partial unique index caught a pending duplicate the check missed
            raise ConflictError("Swap request already sent") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to create swap request %s -> %s", requester_id, recipient_id)
            raise InternalError("Failed to send swap request") from exc

        SWAP_TRANSITIONS.labels(status=SwapStatus.PENDING.value).inc()
        logger.info("Swap request %s created: %s -> %s", swap.id, requester_id, recipient_id)
        return swap

    async def list_requests(
        self, *, user_id: int, direction: SwapDirection = SwapDirection.ALL
    ) -> list[SwapRequestResponse]:
        rows = await self.swap_repo.list_for_user(user_id, direction)
        return [_to_response(swap, requester, recipient) for swap, requester, recipient in rows]

    async def respond(self, *, request_id: int, responder_id: int, status: SwapStatus) -> SwapRequest:
        """Recipient accepts or rejects a pending request; the requester is notified."""
        if status not in RESPONSE_NOTIFICATIONS:
            raise BadRequestError("status must be 'accepted' or 'rejected'")

        try:
            async with unit_of_work(self.session):
                swap = await self.swap_repo.get_by_id(request_id, for_update=True)
                if swap is None:
                    raise NotFoundError("Swap request not found")
                if swap.recipient_id != responder_id:
                    raise ForbiddenError("Not authorized")
                if swap.status != SwapStatus.PENDING:
                    raise ConflictError(f"Swap request already {swap.status.value}")

                # Only a still-pending row matches, whatever the backend does with FOR UPDATE
                if not await self.swap_repo.transition(swap, status):
                    raise ConflictError("Swap request already processed")

                notification_type, title, message = RESPONSE_NOTIFICATIONS[status]
                await self.notification_repo.add(
                    Notification(
                        user_id=swap.requester_id,
                        type=notification_type,
                        title=title,
                        message=message,
                        related_id=swap.id,
                    )
                )
                if status == SwapStatus.ACCEPTED:
                    await self.profile_repo.increment_total_swaps([swap.requester_id, swap.recipient_id])
        except SQLAlchemyError as exc:
            logger.exception("Failed to respond to swap request %s", request_id)
            raise InternalError("Failed to update swap request") from exc

        SWAP_TRANSITIONS.labels(status=status.value).inc()
        logger.info("Swap request %s %s by user %s", request_id, status.value, responder_id)
        return swap

    async def cancel(self, *, request_id: int, requester_id: int) -> SwapRequest:
        """Requester withdraws a pending request. No notification is written."""
        try:
            async with unit_of_work(self.session):
                swap = await self.swap_repo.get_by_id(request_id, for_update=True)
                if swap is None:
                    raise NotFoundError("Swap request not found")
                if swap.requester_id != requester_id:
                    raise ForbiddenError("Not authorized")
                if swap.status != SwapStatus.PENDING:
                    raise ConflictError(f"Swap request already {swap.status.value}")
                if not await self.swap_repo.transition(swap, SwapStatus.CANCELLED):
                    raise ConflictError("Swap request already processed")
        except SQLAlchemyError as exc:
            logger.exception("Failed to cancel swap request %s", request_id)
            raise InternalError("Failed to cancel swap request") from exc

        SWAP_TRANSITIONS.labels(status=SwapStatus.CANCELLED.value).inc()
        logger.info("Swap request %s cancelled by user %s", request_id, requester_id)
        return swap
