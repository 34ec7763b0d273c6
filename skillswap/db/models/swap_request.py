"""
SwapRequest model - a directed proposal between two users with a lifecycle status.
"""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.db.base import Base, utc_now


class SwapStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class SwapRequest(Base):
    """Swap request. Only pending requests may change status."""

    __tablename__ = "swap_requests"
    __table_args__ = (
        # One pending request per ordered (requester, recipient) pair
        Index(
            "uq_swap_requests_pending_pair",
            "requester_id",
            "recipient_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    requester_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[SwapStatus] = mapped_column(
        Enum(
            SwapStatus,
            name="swap_status",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=SwapStatus.PENDING,
        server_default=SwapStatus.PENDING.value,
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), onupdate=utc_now
    )

    def __repr__(self) -> str:
        return (
            f"<SwapRequest(id={self.id}, {self.requester_id}->{self.recipient_id}, "
            f"status={self.status})>"
        )
