"""
FastAPI dependencies for authentication.

Provides ``db_session``, the store / service factories and the
``get_current_user_id`` request gate used across all protected routes.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from auth.service import AuthService, authorize
from config.settings import AuthSettings, config
from database.session import get_db_session
from database.store import ProfileStore, UserStore

_AUTH_SETTINGS = config.auth_settings()


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_auth_settings() -> AuthSettings:
    return _AUTH_SETTINGS


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


def get_profile_store(session: AsyncSession = Depends(db_session)) -> ProfileStore:
    return ProfileStore(session)


def get_auth_service(
    store: UserStore = Depends(get_user_store),
    settings: AuthSettings = Depends(get_auth_settings),
) -> AuthService:
    return AuthService(store, settings)


async def get_current_user_id(
    x_auth_token: Optional[str] = Header(default=None, alias="x-auth-token"),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    settings: AuthSettings = Depends(get_auth_settings),
) -> str:
    """
    Extract and verify the token, returning the authenticated
    ``user_id`` (UUID string).

    Accepts ``x-auth-token: <token>`` or ``Authorization: Bearer <token>``.
    Raises ``UnauthorizedError`` (401) otherwise; the handler never runs.
    """
    token = x_auth_token
    if not token and authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer":
            token = credentials.strip()
    return authorize(token, settings)
