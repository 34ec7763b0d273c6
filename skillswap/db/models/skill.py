"""
Skill model - offered or wanted skill names attached to a user.
"""

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillswap.db.base import Base, utc_now

if TYPE_CHECKING:
    from skillswap.db.models.user import User


class SkillType(StrEnum):
    OFFERED = "offered"
    WANTED = "wanted"


class Skill(Base):
    """One skill row. No uniqueness on (user, name, type); duplicates are allowed."""

    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    skill_name: Mapped[str] = mapped_column(String(255), nullable=False)
    skill_type: Mapped[SkillType] = mapped_column(
        Enum(
            SkillType,
            name="skill_type",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )

    user: Mapped["User"] = relationship("User", back_populates="skills", lazy="raise")

    def __repr__(self) -> str:
        return f"<Skill(user_id={self.user_id}, {self.skill_type}={self.skill_name})>"
