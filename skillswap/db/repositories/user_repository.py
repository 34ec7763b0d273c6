"""
User repository - user lookups and the directory search query.
"""

from sqlalchemy import Select, exists, func, or_, select
from sqlalchemy.orm import selectinload

from skillswap.db.models.profile import Availability, Profile
from skillswap.db.models.skill import Skill
from skillswap.db.models.user import User
from skillswap.db.repositories.base_repository import BaseRepository


def _like_pattern(term: str) -> str:
    """Substring LIKE pattern with the user's own wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class UserRepository(BaseRepository[User]):
    """User-specific queries. Profiles and skills are loaded eagerly where needed."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for authentication."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_with_profile(self, id: int) -> User | None:
        """User with profile and skills; refreshes anything already in the session."""
        result = await self.session.execute(
            select(User)
            .where(User.id == id)
            .options(selectinload(User.profile), selectinload(User.skills))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def search_statement(
        self,
        *,
        search: str | None = None,
        availability: Availability | None = None,
    ) -> Select:
        """Directory listing: name or skill substring match, optional availability facet."""
        stmt = (
            select(User)
            .outerjoin(Profile, Profile.user_id == User.id)
            .options(selectinload(User.profile), selectinload(User.skills))
            .execution_options(populate_existing=True)
        )
        if search:
            pattern = _like_pattern(search)
            skill_match = exists().where(
                Skill.user_id == User.id,
                Skill.skill_name.ilike(pattern, escape="\\"),
            )
            stmt = stmt.where(or_(User.name.ilike(pattern, escape="\\"), skill_match))
        if availability is not None:
            stmt = stmt.where(Profile.availability == availability)
        # Users without a profile row rank last on every backend
        return stmt.order_by(Profile.rating.desc().nulls_last(), User.id)

    async def search(
        self,
        *,
        search: str | None = None,
        availability: Availability | None = None,
    ) -> list[User]:
        result = await self.session.execute(self.search_statement(search=search, availability=availability))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar_one()
