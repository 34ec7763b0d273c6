"""
Profile model - 1:1 extension of User with directory facets and swap stats.
"""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillswap.db.base import Base, utc_now

if TYPE_CHECKING:
    from skillswap.db.models.user import User


class Availability(StrEnum):
    WEEKENDS = "weekends"
    EVENINGS = "evenings"
    WEEKDAYS = "weekdays"
    FLEXIBLE = "flexible"


class Profile(Base):
    """Location, availability, rating and completed swap count for a user."""

    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    availability: Mapped[Availability | None] = mapped_column(
        Enum(
            Availability,
            name="availability",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=True,
    )
    rating: Mapped[Decimal] = mapped_column(
        Numeric(3, 2), nullable=False, default=Decimal("0.00"), server_default="0"
    )
    total_swaps: Mapped[int] = mapped_column(nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), onupdate=utc_now
    )

    user: Mapped["User"] = relationship("User", back_populates="profile", lazy="raise")

    def __repr__(self) -> str:
        return f"<Profile(user_id={self.user_id}, total_swaps={self.total_swaps})>"
