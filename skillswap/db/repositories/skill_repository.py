"""
Skill repository - skills are replaced per category, never diffed.
"""

from collections.abc import Sequence

from sqlalchemy import delete

from skillswap.db.models.skill import Skill, SkillType
from skillswap.db.repositories.base_repository import BaseRepository


class SkillRepository(BaseRepository[Skill]):
    def __init__(self, session):
        super().__init__(session, Skill)

    async def set_skills(self, user_id: int, skill_type: SkillType, names: Sequence[str]) -> list[Skill]:
        """Replace every skill of ``skill_type`` for the user with ``names`` (in order)."""
        await self.session.execute(
            delete(Skill)
            .where(Skill.user_id == user_id, Skill.skill_type == skill_type)
            .execution_options(synchronize_session=False)
        )
        skills = [Skill(user_id=user_id, skill_name=name, skill_type=skill_type) for name in names]
        self.session.add_all(skills)
        await self.session.flush()
        return skills
