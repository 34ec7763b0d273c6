"""
Auth service - registration and login.
Registration creates the user and its empty profile in one transaction.
"""

import logging
from datetime import date

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from skillswap.config import Settings
from skillswap.core.exceptions import ConflictError, InternalError, UnauthorizedError
from skillswap.core.security import create_access_token, hash_password, verify_password
from skillswap.db.models.profile import Profile
from skillswap.db.models.user import User
from skillswap.db.repositories.profile_repository import ProfileRepository
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import unit_of_work
from skillswap.schemas.auth import AuthResponse, AuthUser

logger = logging.getLogger(__name__)


def _issue_token(user: User, settings: Settings) -> str:
    return create_access_token(user.id, settings, extra={"email": user.email})


class AuthService:
    def __init__(self, user_repo: UserRepository, profile_repo: ProfileRepository, settings: Settings):
        self.user_repo = user_repo
        self.profile_repo = profile_repo
        self.settings = settings
        self.session = user_repo.session

    async def register(
        self,
        *,
        email: str,
        password: str,
        date_of_birth: date | None = None,
        name: str | None = None,
        profile_photo: str | None = None,
    ) -> AuthResponse:
        try:
            async with unit_of_work(self.session):
                if await self.user_repo.get_by_email(email) is not None:
                    raise ConflictError("User already exists with this email")
                user = await self.user_repo.add(
                    User(
                        email=email,
                        hashed_password=hash_password(password),
                        name=name,
                        date_of_birth=date_of_birth,
                        profile_photo=profile_photo,
                    )
                )
                await self.profile_repo.add(Profile(user_id=user.id))
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email
            raise ConflictError("User already exists with this email") from exc
        except SQLAlchemyError as exc:
            logger.exception("Registration failed for %s", email)
            raise InternalError("Registration failed") from exc

        logger.info("Registered user %s (id=%s)", user.email, user.id)
        return AuthResponse(
            message="User registered successfully",
            token=_issue_token(user, self.settings),
            user=AuthUser.model_validate(user),
        )

    async def login(self, *, email: str, password: str) -> AuthResponse:
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Invalid credentials")
        return AuthResponse(
            message="Login successful",
            token=_issue_token(user, self.settings),
            user=AuthUser.model_validate(user),
        )
