"""
Swap request endpoints - create, list, respond, cancel.
Business rules live in SwapService; handlers only map HTTP to calls.
"""

from fastapi import APIRouter, Query, status

from skillswap.core.dependencies import CurrentUserId
from skillswap.db.models.swap_request import SwapStatus
from skillswap.db.repositories.notification_repository import NotificationRepository
from skillswap.db.repositories.profile_repository import ProfileRepository
from skillswap.db.repositories.swap_request_repository import SwapDirection, SwapRequestRepository
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import DbSession
from skillswap.schemas.common import MessageResponse
from skillswap.schemas.swap import (
    SwapCreatedResponse,
    SwapRequestCreate,
    SwapRequestResponse,
    SwapRespond,
)
from skillswap.services.swap_service import SwapService

router = APIRouter()


def _get_swap_service(session: DbSession) -> SwapService:
    """Factory for service with repository injection."""
    return SwapService(
        SwapRequestRepository(session),
        UserRepository(session),
        ProfileRepository(session),
        NotificationRepository(session),
    )


@router.post("/request", response_model=SwapCreatedResponse, status_code=status.HTTP_201_CREATED)
async def request_swap(session: DbSession, data: SwapRequestCreate, user_id: CurrentUserId):
    swap = await _get_swap_service(session).create_request(
        requester_id=user_id, recipient_id=data.recipient_id, message=data.message
    )
    return SwapCreatedResponse(message="Swap request sent successfully", id=swap.id)


@router.get("", response_model=list[SwapRequestResponse])
async def list_swaps(
    session: DbSession,
    user_id: CurrentUserId,
    type: SwapDirection = Query(SwapDirection.ALL),
):
    """GET /api/swaps?type=all|sent|received, newest first."""
    return await _get_swap_service(session).list_requests(user_id=user_id, direction=type)


@router.put("/{request_id}/respond", response_model=MessageResponse)
async def respond_to_swap(session: DbSession, request_id: int, data: SwapRespond, user_id: CurrentUserId):
    await _get_swap_service(session).respond(
        request_id=request_id, responder_id=user_id, status=SwapStatus(data.status)
    )
    return MessageResponse(message="Swap request updated successfully")


@router.put("/{request_id}/cancel", response_model=MessageResponse)
async def cancel_swap(session: DbSession, request_id: int, user_id: CurrentUserId):
    await _get_swap_service(session).cancel(request_id=request_id, requester_id=user_id)
    return MessageResponse(message="Swap request cancelled")
