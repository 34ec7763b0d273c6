# Repository pattern: services depend on these, not on raw sessions

from skillswap.db.repositories.notification_repository import NotificationRepository
from skillswap.db.repositories.profile_repository import ProfileRepository
from skillswap.db.repositories.skill_repository import SkillRepository
from skillswap.db.repositories.swap_request_repository import SwapDirection, SwapRequestRepository
from skillswap.db.repositories.user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "ProfileRepository",
    "SkillRepository",
    "SwapDirection",
    "SwapRequestRepository",
    "UserRepository",
]
