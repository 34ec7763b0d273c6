"""
Schema bootstrap and sample data.
Tables are created when missing; the sample directory is only inserted into an empty users table.
"""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.security import hash_password
from skillswap.db.models.profile import Availability, Profile
from skillswap.db.models.skill import Skill, SkillType
from skillswap.db.models.user import User
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import Database, unit_of_work

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "password123"

SAMPLE_USERS = [
    {
        "email": "priya.sharma@example.com",
        "name": "Priya Sharma",
        "date_of_birth": date(1995, 3, 15),
        "profile_photo": "https://images.unsplash.com/photo-1544005313-94ddf0286df2?w=150&h=150&fit=crop&crop=face",
        "location": "Mumbai, Maharashtra",
        "availability": Availability.WEEKENDS,
        "offered": ["Photoshop", "Illustrator", "UI/UX Design"],
        "wanted": ["JavaScript", "React", "Node.js"],
    },
    {
        "email": "arjun.patel@example.com",
        "name": "Arjun Patel",
        "date_of_birth": date(1992, 7, 22),
        "profile_photo": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150&fit=crop&crop=face",
        "location": "Bangalore, Karnataka",
        "availability": Availability.EVENINGS,
        "offered": ["JavaScript", "React", "Node.js"],
        "wanted": ["Python", "Data Analysis", "Machine Learning"],
    },
    {
        "email": "anjali.reddy@example.com",
        "name": "Anjali Reddy",
        "date_of_birth": date(1990, 11, 8),
        "profile_photo": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=150&h=150&fit=crop&crop=face",
        "location": "Hyderabad, Telangana",
        "availability": Availability.WEEKDAYS,
        "offered": ["Excel", "PowerPoint", "Project Management"],
        "wanted": ["Graphic Design", "Canva", "Social Media Marketing"],
    },
    {
        "email": "rahul.singh@example.com",
        "name": "Rahul Singh",
        "date_of_birth": date(1988, 5, 12),
        "profile_photo": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&h=150&fit=crop&crop=face",
        "location": "Delhi, NCR",
        "availability": Availability.FLEXIBLE,
        "offered": ["Python", "Data Analysis", "Machine Learning"],
        "wanted": ["Web Development", "HTML/CSS", "JavaScript"],
    },
    {
        "email": "kavya.iyer@example.com",
        "name": "Kavya Iyer",
        "date_of_birth": date(1993, 9, 30),
        "profile_photo": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150&h=150&fit=crop&crop=face",
        "location": "Chennai, Tamil Nadu",
        "availability": Availability.WEEKENDS,
        "offered": ["Graphic Design", "Canva", "Social Media Marketing"],
        "wanted": ["Excel", "Data Visualization", "Business Analytics"],
    },
    {
        "email": "vikram.malhotra@example.com",
        "name": "Vikram Malhotra",
        "date_of_birth": date(1991, 12, 3),
        "profile_photo": "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?w=150&h=150&fit=crop&crop=face",
        "location": "Pune, Maharashtra",
        "availability": Availability.EVENINGS,
        "offered": ["Web Development", "HTML/CSS", "JavaScript"],
        "wanted": ["Mobile App Development", "React Native", "Flutter"],
    },
]


async def seed_sample_data(session: AsyncSession) -> int:
    """Insert the sample users when the users table is empty. Returns users inserted."""
    users = UserRepository(session)
    if await users.count() > 0:
        logger.info("Sample data already present, skipping seed")
        return 0

    hashed = hash_password(SAMPLE_PASSWORD)
    async with unit_of_work(session):
        for sample in SAMPLE_USERS:
            user = await users.add(
                User(
                    email=sample["email"],
                    hashed_password=hashed,
                    name=sample["name"],
                    date_of_birth=sample["date_of_birth"],
                    profile_photo=sample["profile_photo"],
                )
            )
            session.add(
                Profile(user_id=user.id, location=sample["location"], availability=sample["availability"])
            )
            session.add_all(
                [Skill(user_id=user.id, skill_name=n, skill_type=SkillType.OFFERED) for n in sample["offered"]]
                + [Skill(user_id=user.id, skill_name=n, skill_type=SkillType.WANTED) for n in sample["wanted"]]
            )
    logger.info("Inserted %d sample users", len(SAMPLE_USERS))
    return len(SAMPLE_USERS)


async def init_db(database: Database, *, seed: bool = True) -> None:
    """Create missing tables, then seed an empty directory."""
    await database.create_all()
    if seed:
        async with database.session_maker() as session:
            await seed_sample_data(session)
