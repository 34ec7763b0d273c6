"""
Health checks - liveness for load balancers, readiness with a DB round trip.
"""

from fastapi import APIRouter
from sqlalchemy import text

from skillswap.db.session import DbSession

router = APIRouter()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "OK", "message": "Skill Swap API is running!"}


@router.get("/ready")
async def ready(session: DbSession):
    """Readiness: can we reach the database?"""
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
