"""
Auth endpoints - registration (multipart, optional photo) and login.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status
from pydantic import ValidationError

from skillswap.core.dependencies import AppSettings
from skillswap.core.exceptions import BadRequestError, SkillSwapError
from skillswap.db.repositories.profile_repository import ProfileRepository
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import DbSession
from skillswap.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from skillswap.services.auth_service import AuthService
from skillswap.services.upload_service import discard_profile_photo, store_profile_photo

router = APIRouter()


def _get_auth_service(session: DbSession, settings: AppSettings) -> AuthService:
    return AuthService(UserRepository(session), ProfileRepository(session), settings)


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {error['msg']}" if field else error["msg"]


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    session: DbSession,
    settings: AppSettings,
    email: Annotated[str, Form()],
    password: Annotated[str, Form()],
    date_of_birth: Annotated[date | None, Form(alias="dateOfBirth")] = None,
    name: Annotated[str | None, Form()] = None,
    profile_photo: Annotated[UploadFile | None, File(alias="profilePhoto")] = None,
):
    """Create an account and return a bearer token (valid 24h)."""
    email = email.strip()
    try:
        data = RegisterRequest(email=email, password=password, date_of_birth=date_of_birth, name=name)
    except ValidationError as exc:
        raise BadRequestError(_first_error(exc)) from None

    photo_path = None
    if profile_photo is not None and profile_photo.filename:
        photo_path = await store_profile_photo(profile_photo, settings)
    try:
        return await _get_auth_service(session, settings).register(
            # Stored exactly as submitted
            email=email,
            password=data.password,
            date_of_birth=data.date_of_birth,
            name=data.name.strip() if data.name else None,
            profile_photo=photo_path,
        )
    except SkillSwapError:
        discard_profile_photo(photo_path, settings)
        raise


@router.post("/login", response_model=AuthResponse)
async def login(session: DbSession, settings: AppSettings, data: LoginRequest):
    """Authenticate and return JWT."""
    return await _get_auth_service(session, settings).login(email=data.email.strip(), password=data.password)
