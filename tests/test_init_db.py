"""
Schema bootstrap and sample-data seeding.
"""

import pytest
from sqlalchemy import func, select

from skillswap.core.security import verify_password
from skillswap.db.init_db import SAMPLE_PASSWORD, SAMPLE_USERS, init_db, seed_sample_data
from skillswap.db.models import Skill, SkillType, User
from skillswap.db.repositories import UserRepository


@pytest.mark.asyncio
async def test_seed_fills_empty_directory_once(database):
    await init_db(database, seed=True)
    await init_db(database, seed=True)

    async with database.session_maker() as session:
        assert await UserRepository(session).count() == len(SAMPLE_USERS)
        priya = await UserRepository(session).get_with_profile(1)
        assert priya.email == "priya.sharma@example.com"
        assert priya.profile.location == "Mumbai, Maharashtra"
        assert verify_password(SAMPLE_PASSWORD, priya.hashed_password)
        offered = [s.skill_name for s in priya.skills if s.skill_type == SkillType.OFFERED]
        assert offered == ["Photoshop", "Illustrator", "UI/UX Design"]


@pytest.mark.asyncio
async def test_seed_skips_populated_directory(session, alice):
    assert await seed_sample_data(session) == 0
    assert (await session.execute(select(func.count()).select_from(User))).scalar_one() == 1
    assert (await session.execute(select(func.count()).select_from(Skill))).scalar_one() == 0


@pytest.mark.asyncio
async def test_init_without_seed_leaves_tables_empty(database):
    await init_db(database, seed=False)
    async with database.session_maker() as session:
        assert await UserRepository(session).count() == 0
