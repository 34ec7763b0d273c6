from skillswap.db.models.notification import Notification, NotificationType
from skillswap.db.models.profile import Availability, Profile
from skillswap.db.models.skill import Skill, SkillType
from skillswap.db.models.swap_request import SwapRequest, SwapStatus
from skillswap.db.models.user import User

__all__ = [
    "Availability",
    "Notification",
    "NotificationType",
    "Profile",
    "Skill",
    "SkillType",
    "SwapRequest",
    "SwapStatus",
    "User",
]
