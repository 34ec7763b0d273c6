"""Notification schemas."""

from skillswap.db.models.notification import NotificationType
from skillswap.schemas.common import CamelModel


class NotificationResponse(CamelModel):
    id: int
    type: NotificationType
    title: str
    message: str
    related_id: int | None = None
    # Human-readable, e.g. "Oct 19, 2026, 03:45 PM" (UTC)
    time: str
    read: bool


class MarkAllReadResponse(CamelModel):
    message: str
    updated: int
