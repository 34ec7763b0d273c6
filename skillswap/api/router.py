"""
API router - aggregates all endpoint modules under /api.
"""

from fastapi import APIRouter

from skillswap.api.endpoints import auth, health, notifications, swaps, users
from skillswap.schemas.common import ErrorResponse

# Documented error shape; every handler in core.exception_handlers emits it
ERROR_RESPONSES = {
    code: {"model": ErrorResponse, "description": description}
    for code, description in [
        (400, "Invalid input"),
        (401, "Missing credentials"),
        (403, "Invalid token or not allowed"),
        (404, "Not found"),
        (409, "Conflicting state"),
    ]
}

api_router = APIRouter(responses={500: {"model": ErrorResponse, "description": "Server error"}})

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"], responses=ERROR_RESPONSES)
api_router.include_router(users.router, prefix="/users", tags=["users"], responses=ERROR_RESPONSES)
api_router.include_router(swaps.router, prefix="/swaps", tags=["swaps"], responses=ERROR_RESPONSES)
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"], responses=ERROR_RESPONSES
)
