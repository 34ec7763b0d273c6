"""
Directory service - browse/search users, read profiles, update one's own profile.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from skillswap.core.exceptions import BadRequestError, ForbiddenError, InternalError, NotFoundError
from skillswap.db.models.profile import Availability, Profile
from skillswap.db.models.skill import SkillType
from skillswap.db.models.user import User
from skillswap.db.repositories.profile_repository import ProfileRepository
from skillswap.db.repositories.skill_repository import SkillRepository
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import unit_of_work
from skillswap.schemas.user import ProfileUpdate, UserProfileResponse, UserSummary

logger = logging.getLogger(__name__)


def _skill_names(user: User, skill_type: SkillType) -> list[str]:
    """Names of one category, de-duplicated, in insertion order."""
    names = [s.skill_name for s in user.skills if s.skill_type == skill_type]
    return list(dict.fromkeys(names))


def _summary_fields(user: User) -> dict:
    profile = user.profile
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "profile_photo": user.profile_photo,
        "location": profile.location if profile else None,
        "availability": profile.availability if profile else None,
        "rating": float(profile.rating or 0) if profile else 0.0,
        "skills_offered": _skill_names(user, SkillType.OFFERED),
        "skills_wanted": _skill_names(user, SkillType.WANTED),
    }


def _to_profile_response(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        **_summary_fields(user),
        date_of_birth=user.date_of_birth,
        total_swaps=user.profile.total_swaps if user.profile else 0,
    )


def parse_availability(raw: str | None) -> Availability | None:
    """Query value -> filter. Empty or ``all`` means no filter."""
    if raw is None or raw.strip() in ("", "all"):
        return None
    try:
        return Availability(raw.strip())
    except ValueError:
        allowed = ", ".join(["all", *[a.value for a in Availability]])
        raise BadRequestError(f"availability must be one of: {allowed}") from None


def clean_skill_names(names: list[str]) -> list[str]:
    """Strip whitespace and drop blanks; order and duplicates are kept."""
    return [name.strip() for name in names if name and name.strip()]


class DirectoryService:
    def __init__(
        self,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
        skill_repo: SkillRepository,
    ):
        self.user_repo = user_repo
        self.profile_repo = profile_repo
        self.skill_repo = skill_repo
        self.session = user_repo.session

    async def list_users(
        self, *, search: str | None = None, availability: Availability | None = None
    ) -> list[UserSummary]:
        term = search.strip() if search else None
        users = await self.user_repo.search(search=term or None, availability=availability)
        return [UserSummary(**_summary_fields(u)) for u in users]

    async def get_profile(self, user_id: int) -> UserProfileResponse:
        user = await self.user_repo.get_with_profile(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return _to_profile_response(user)

    async def update_profile(
        self,
        *,
        actor_id: int,
        user_id: int,
        update: ProfileUpdate,
        profile_photo: str | None = None,
    ) -> UserProfileResponse:
        """Apply the given fields. Skill lists present in ``update`` replace that whole category."""
        if actor_id != user_id:
            raise ForbiddenError("Not authorized")

        try:
            async with unit_of_work(self.session):
                user = await self.user_repo.get_by_id(user_id)
                if user is None:
                    raise NotFoundError("User not found")
                if update.name is not None:
                    user.name = update.name.strip() or None
                if profile_photo is not None:
                    user.profile_photo = profile_photo

                profile = await self.profile_repo.get_by_user_id(user_id)
                if profile is None:
                    profile = await self.profile_repo.add(Profile(user_id=user_id))
                if update.location is not None:
                    profile.location = update.location.strip() or None
                if update.availability is not None:
                    profile.availability = update.availability

                if update.skills_offered is not None:
                    await self.skill_repo.set_skills(
                        user_id, SkillType.OFFERED, clean_skill_names(update.skills_offered)
                    )
                if update.skills_wanted is not None:
                    await self.skill_repo.set_skills(
                        user_id, SkillType.WANTED, clean_skill_names(update.skills_wanted)
                    )
        except SQLAlchemyError as exc:
            logger.exception("Profile update failed for user %s", user_id)
            raise InternalError("Failed to update profile") from exc

        logger.info("Updated profile for user %s", user_id)
        return await self.get_profile(user_id)
