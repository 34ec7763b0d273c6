"""
Notification API tests - feed limits, read flags and ownership checks.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.db.models import Notification, NotificationType
from skillswap.services.notification_service import format_timestamp, parse_limit


async def seed_notifications(session: AsyncSession, user_id: int, count: int) -> list[int]:
    """Insert ``count`` notifications one minute apart; returns ids oldest first."""
    start = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
    rows = [
        Notification(
            user_id=user_id,
            type=NotificationType.SWAP_REQUEST,
            title="New Swap Request",
            message=f"message {i}",
            related_id=i,
            created_at=start + timedelta(minutes=i),
        )
        for i in range(count)
    ]
    session.add_all(rows)
    await session.commit()
    return [n.id for n in rows]


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 50), ("10", 10), (" 7 ", 7), ("0", 50), ("-3", 50), ("abc", 50), ("2.5", 50), (12, 12)],
)
def test_parse_limit(raw, expected):
    assert parse_limit(raw) == expected


def test_format_timestamp():
    assert format_timestamp(datetime(2026, 10, 19, 15, 45, tzinfo=timezone.utc)) == "Oct 19, 2026, 03:45 PM"
    assert format_timestamp(datetime(2026, 1, 5, 0, 7)) == "Jan 5, 2026, 12:07 AM"
    ist = timezone(timedelta(hours=5, minutes=30))
    assert format_timestamp(datetime(2026, 3, 1, 10, 0, tzinfo=ist)) == "Mar 1, 2026, 04:30 AM"


@pytest.mark.asyncio
async def test_feed_is_newest_first_with_display_time(client: AsyncClient, session, alice):
    ids = await seed_notifications(session, alice.id, 3)
    response = await client.get("/api/notifications", headers=alice.headers)
    assert response.status_code == 200
    feed = response.json()
    assert [n["id"] for n in feed] == list(reversed(ids))
    assert feed[0]["time"] == "Oct 19, 2026, 09:02 AM"
    assert feed[0]["relatedId"] == 2
    assert feed[0]["read"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("limit,expected", [(None, 50), ("5", 5), ("0", 50), ("abc", 50), ("100", 55)])
async def test_feed_limit(client: AsyncClient, session, alice, limit, expected):
    await seed_notifications(session, alice.id, 55)
    params = {"limit": limit} if limit is not None else {}
    response = await client.get("/api/notifications", params=params, headers=alice.headers)
    assert response.status_code == 200
    assert len(response.json()) == expected


@pytest.mark.asyncio
async def test_feed_is_private(client: AsyncClient, session, alice, bob):
    await seed_notifications(session, alice.id, 2)
    assert (await client.get("/api/notifications", headers=bob.headers)).json() == []


@pytest.mark.asyncio
async def test_mark_read_is_idempotent(client: AsyncClient, session, alice):
    [notification_id] = await seed_notifications(session, alice.id, 1)
    for _ in range(2):
        response = await client.put(f"/api/notifications/{notification_id}/read", headers=alice.headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Notification marked as read"}

    feed = (await client.get("/api/notifications", headers=alice.headers)).json()
    assert feed[0]["read"] is True


@pytest.mark.asyncio
async def test_cannot_mark_someone_elses_notification(client: AsyncClient, session, alice, bob):
    [notification_id] = await seed_notifications(session, alice.id, 1)
    response = await client.put(f"/api/notifications/{notification_id}/read", headers=bob.headers)
    assert response.status_code == 403

    feed = (await client.get("/api/notifications", headers=alice.headers)).json()
    assert feed[0]["read"] is False


@pytest.mark.asyncio
async def test_mark_missing_notification(client: AsyncClient, alice):
    response = await client.put("/api/notifications/9999/read", headers=alice.headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Notification not found"}


@pytest.mark.asyncio
async def test_mark_all_read(client: AsyncClient, session, alice, bob):
    first, _, _ = await seed_notifications(session, alice.id, 3)
    await seed_notifications(session, bob.id, 2)
    await client.put(f"/api/notifications/{first}/read", headers=alice.headers)

    response = await client.put("/api/notifications/read-all", headers=alice.headers)
    assert response.status_code == 200
    assert response.json() == {"message": "All notifications marked as read", "updated": 2}

    assert all(n["read"] for n in (await client.get("/api/notifications", headers=alice.headers)).json())
    assert not any(n["read"] for n in (await client.get("/api/notifications", headers=bob.headers)).json())

    again = await client.put("/api/notifications/read-all", headers=alice.headers)
    assert again.json()["updated"] == 0


@pytest.mark.asyncio
async def test_notifications_require_token(client: AsyncClient):
    assert (await client.get("/api/notifications")).status_code == 401
