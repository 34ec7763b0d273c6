"""Directory/profile schemas - API contract for users and their skills."""

from datetime import date

from pydantic import Field

from skillswap.db.models.profile import Availability
from skillswap.schemas.common import CamelModel


class UserSummary(CamelModel):
    """One directory entry."""

    id: int
    name: str | None = None
    email: str
    profile_photo: str | None = None
    location: str | None = None
    availability: Availability | None = None
    rating: float = 0.0
    skills_offered: list[str] = Field(default_factory=list)
    skills_wanted: list[str] = Field(default_factory=list)


class UserProfileResponse(UserSummary):
    date_of_birth: date | None = None
    total_swaps: int = 0


class ProfileUpdate(CamelModel):
    """Partial profile update. A skills list, when given, replaces that category entirely."""

    name: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    availability: Availability | None = None
    skills_offered: list[str] | None = None
    skills_wanted: list[str] | None = None
