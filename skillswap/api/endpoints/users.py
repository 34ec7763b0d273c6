"""
Directory endpoints - browse/search users, view profiles, update one's own profile.
"""

import json
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile
from pydantic import ValidationError

from skillswap.core.dependencies import AppSettings, CurrentUserId
from skillswap.core.exceptions import BadRequestError, ForbiddenError, SkillSwapError
from skillswap.db.repositories.profile_repository import ProfileRepository
from skillswap.db.repositories.skill_repository import SkillRepository
from skillswap.db.repositories.user_repository import UserRepository
from skillswap.db.session import DbSession
from skillswap.schemas.user import ProfileUpdate, UserProfileResponse, UserSummary
from skillswap.services.directory_service import DirectoryService, parse_availability
from skillswap.services.upload_service import discard_profile_photo, store_profile_photo

router = APIRouter()


def _get_directory_service(session: DbSession) -> DirectoryService:
    return DirectoryService(UserRepository(session), ProfileRepository(session), SkillRepository(session))


def _parse_skill_list(raw: str | None, field: str) -> list[str] | None:
    """Form value holding a JSON array of skill names."""
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise BadRequestError(f"{field} must be a JSON array of strings") from None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise BadRequestError(f"{field} must be a JSON array of strings")
    return value


@router.get("", response_model=list[UserSummary])
async def list_users(session: DbSession, search: str | None = None, availability: str | None = None):
    """Directory: GET /api/users?search=react&availability=weekends."""
    return await _get_directory_service(session).list_users(
        search=search, availability=parse_availability(availability)
    )


@router.get("/me", response_model=UserProfileResponse)
async def get_me(session: DbSession, user_id: CurrentUserId):
    return await _get_directory_service(session).get_profile(user_id)


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(session: DbSession, user_id: int, current_user_id: CurrentUserId):
    return await _get_directory_service(session).get_profile(user_id)


@router.put("/{user_id}", response_model=UserProfileResponse)
async def update_user(
    session: DbSession,
    settings: AppSettings,
    user_id: int,
    current_user_id: CurrentUserId,
    name: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    availability: Annotated[str | None, Form()] = None,
    skills_offered: Annotated[str | None, Form(alias="skillsOffered")] = None,
    skills_wanted: Annotated[str | None, Form(alias="skillsWanted")] = None,
    profile_photo: Annotated[UploadFile | None, File(alias="profilePhoto")] = None,
):
    """Update own profile. skillsOffered/skillsWanted replace the whole category."""
    if current_user_id != user_id:
        raise ForbiddenError("Not authorized")
    try:
        update = ProfileUpdate(
            name=name,
            location=location,
            availability=availability or None,
            skills_offered=_parse_skill_list(skills_offered, "skillsOffered"),
            skills_wanted=_parse_skill_list(skills_wanted, "skillsWanted"),
        )
    except ValidationError as exc:
        error = exc.errors()[0]
        raise BadRequestError(f"{'.'.join(map(str, error['loc']))}: {error['msg']}") from None

    photo_path = None
    if profile_photo is not None and profile_photo.filename:
        photo_path = await store_profile_photo(profile_photo, settings)
    try:
        return await _get_directory_service(session).update_profile(
            actor_id=current_user_id, user_id=user_id, update=update, profile_photo=photo_path
        )
    except SkillSwapError:
        discard_profile_photo(photo_path, settings)
        raise
