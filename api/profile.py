"""
Profile routes.

Route prefix: /api/profile
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_user_id, get_profile_store, get_user_store
from auth.errors import ProfileNotFoundError, UnauthorizedError
from auth.schemas import ProfileOut, ProfileRequest, ProfileUser
from database.store import ProfileStore, UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profile"])


@router.get("/me", response_model=ProfileOut)
async def my_profile(
    user_id: str = Depends(get_current_user_id),
    profiles: ProfileStore = Depends(get_profile_store),
    users: UserStore = Depends(get_user_store),
) -> ProfileOut:
    """Current user's profile, with the owner's name and avatar."""
    profile = await profiles.find_by_user(user_id)
    if profile is None:
        raise ProfileNotFoundError(detail=f"no profile for {user_id}")
    user = await users.find_by_id(user_id)
    if user is None:
        raise UnauthorizedError(detail=f"token for unknown user {user_id}")
    return ProfileOut.model_validate({**_profile_fields(profile), "user": ProfileUser.model_validate(user)})


@router.post("", response_model=ProfileOut)
async def save_profile(
    req: ProfileRequest,
    user_id: str = Depends(get_current_user_id),
    profiles: ProfileStore = Depends(get_profile_store),
    users: UserStore = Depends(get_user_store),
) -> ProfileOut:
    """Create or update the current user's profile."""
    user = await users.find_by_id(user_id)
    if user is None:
        raise UnauthorizedError(detail=f"token for unknown user {user_id}")
    profile = await profiles.upsert(user.id, req.model_dump(exclude_unset=True))
    logger.info("Saved profile for %s", user_id)
    return ProfileOut.model_validate({**_profile_fields(profile), "user": ProfileUser.model_validate(user)})


def _profile_fields(profile) -> dict:
    return {
        "id": profile.id,
        "status": profile.status,
        "skills": profile.skills or [],
        "company": profile.company,
        "website": profile.website,
        "location": profile.location,
        "bio": profile.bio,
        "github_username": profile.github_username,
        "date": profile.date,
    }
