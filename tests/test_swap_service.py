"""
SwapService tests against the database directly - races and all-or-nothing transitions.
"""

import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from skillswap.core.exceptions import BadRequestError, ConflictError, InternalError, SkillSwapError
from skillswap.db.models import Notification, Profile, SwapRequest, SwapStatus
from skillswap.db.repositories import (
    NotificationRepository,
    ProfileRepository,
    SwapRequestRepository,
    UserRepository,
)
from skillswap.services.swap_service import SwapService


def build_service(session) -> SwapService:
    return SwapService(
        SwapRequestRepository(session),
        UserRepository(session),
        ProfileRepository(session),
        NotificationRepository(session),
    )


async def count(database, stmt) -> int:
    async with database.session_maker() as s:
        return (await s.execute(stmt)).scalar_one()


@pytest.mark.asyncio
async def test_self_request_rejected_before_touching_db(session):
    with pytest.raises(BadRequestError):
        await build_service(session).create_request(requester_id=1, recipient_id=1, message="")


@pytest.mark.asyncio
async def test_concurrent_duplicate_requests_create_one(database, alice, bob):
    async def attempt():
        async with database.session_maker() as s:
            swap = await build_service(s).create_request(
                requester_id=alice.id, recipient_id=bob.id, message="race"
            )
            return swap.id

    results = await asyncio.gather(attempt(), attempt(), return_exceptions=True)

    created = [r for r in results if isinstance(r, int)]
    failed = [r for r in results if isinstance(r, BaseException)]
    assert len(created) == 1
    assert len(failed) == 1
    assert isinstance(failed[0], SkillSwapError)

    pending = select(func.count()).select_from(SwapRequest).where(SwapRequest.status == SwapStatus.PENDING)
    assert await count(database, pending) == 1
    assert await count(database, select(func.count()).select_from(Notification)) == 1


@pytest.mark.asyncio
async def test_concurrent_responses_apply_once(database, session, alice, bob):
    swap = await build_service(session).create_request(requester_id=alice.id, recipient_id=bob.id, message="")
    request_id = swap.id

    async def attempt(status: SwapStatus):
        async with database.session_maker() as s:
            await build_service(s).respond(request_id=request_id, responder_id=bob.id, status=status)
            return status

    results = await asyncio.gather(
        attempt(SwapStatus.ACCEPTED), attempt(SwapStatus.ACCEPTED), return_exceptions=True
    )
    assert sum(1 for r in results if r == SwapStatus.ACCEPTED) == 1
    assert sum(1 for r in results if isinstance(r, SkillSwapError)) == 1

    total = select(func.sum(Profile.total_swaps))
    notified = select(func.count()).select_from(Notification).where(Notification.user_id == alice.id)
    assert await count(database, total) == 2
    assert await count(database, notified) == 1


@pytest.mark.asyncio
async def test_failed_notification_rolls_back_transition(database, session, alice, bob, monkeypatch):
    swap = await build_service(session).create_request(requester_id=alice.id, recipient_id=bob.id, message="")
    request_id = swap.id

    async def broken_add(self, entity):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(NotificationRepository, "add", broken_add)

    with pytest.raises(InternalError):
        await build_service(session).respond(
            request_id=request_id, responder_id=bob.id, status=SwapStatus.ACCEPTED
        )

    async with database.session_maker() as s:
        stored = await s.get(SwapRequest, request_id)
        assert stored.status == SwapStatus.PENDING
        totals = (await s.execute(select(Profile.total_swaps))).scalars().all()
        assert totals == [0, 0]


@pytest.mark.asyncio
async def test_failed_notification_rolls_back_new_request(database, session, alice, bob, monkeypatch):
    async def broken_add(self, entity):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(NotificationRepository, "add", broken_add)

    with pytest.raises(InternalError):
        await build_service(session).create_request(requester_id=alice.id, recipient_id=bob.id, message="")

    assert await count(database, select(func.count()).select_from(SwapRequest)) == 0


@pytest.mark.asyncio
async def test_cancelled_request_is_terminal(session, alice, bob):
    service = build_service(session)
    swap = await service.create_request(requester_id=alice.id, recipient_id=bob.id, message="")
    request_id = swap.id
    await service.cancel(request_id=request_id, requester_id=alice.id)

    with pytest.raises(ConflictError):
        await service.cancel(request_id=request_id, requester_id=alice.id)
    with pytest.raises(ConflictError):
        await service.respond(request_id=request_id, responder_id=bob.id, status=SwapStatus.REJECTED)


@pytest.mark.asyncio
async def test_respond_refuses_non_decision_status(session):
    with pytest.raises(BadRequestError):
        await build_service(session).respond(request_id=1, responder_id=1, status=SwapStatus.CANCELLED)
