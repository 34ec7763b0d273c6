"""
Profile repository - profile rows and the completed-swap counters.
"""

from collections.abc import Iterable

from sqlalchemy import select, update

from skillswap.db.models.profile import Profile
from skillswap.db.repositories.base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self, session):
        super().__init__(session, Profile)

    async def get_by_user_id(self, user_id: int) -> Profile | None:
        result = await self.session.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    async def increment_total_swaps(self, user_ids: Iterable[int]) -> None:
        """Add one completed swap to each listed user, in a single statement."""
        await self.session.execute(
            update(Profile)
            .where(Profile.user_id.in_(list(user_ids)))
            .values(total_swaps=Profile.total_swaps + 1)
            .execution_options(synchronize_session="fetch")
        )
