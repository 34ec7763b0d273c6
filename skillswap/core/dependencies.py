"""
FastAPI dependencies - app settings and bearer-token authentication.
Missing credentials are 401; a token that fails verification is 403.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from skillswap.config import Settings
from skillswap.core.exceptions import ForbiddenError, UnauthorizedError
from skillswap.core.security import decode_access_token
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import DbSession

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


async def get_current_user_id(
    session: DbSession,
    settings: AppSettings,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int:
    """Resolve the bearer token to a user id."""
    if not credentials:
        raise UnauthorizedError("Access token required")
    payload = decode_access_token(credentials.credentials, settings)
    if not payload or "sub" not in payload:
        raise ForbiddenError("Invalid token")
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise ForbiddenError("Invalid token") from None
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user.id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
