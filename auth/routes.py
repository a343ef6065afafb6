"""
Auth API routes — register, login, current user.

Route prefixes: /api/users, /api/auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth.dependencies import get_auth_service, get_current_user_id, get_user_store
from auth.errors import UnauthorizedError
from auth.schemas import LoginRequest, RegisterRequest, TokenResponse, UserOut
from auth.service import AuthService
from database.store import UserStore

users_router = APIRouter(tags=["users"])
router = APIRouter(tags=["auth"])


@users_router.post("", response_model=TokenResponse)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Register a new user."""
    return TokenResponse(token=await service.register(req))


@router.post("", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Login with email + password."""
    return TokenResponse(token=await service.login(req))


@router.get("", response_model=UserOut)
async def current_user(
    user_id: str = Depends(get_current_user_id),
    store: UserStore = Depends(get_user_store),
) -> UserOut:
    """Return the authenticated user, without the password hash."""
    user = await store.find_by_id(user_id)
    if user is None:
        raise UnauthorizedError(detail=f"token for unknown user {user_id}")
    return UserOut.model_validate(user)
