"""
Persistence adapters for user credentials and profiles.

``UserStore`` is the only owner of ``User`` rows; services go through
``find_by_email`` / ``find_by_id`` / ``save``.  Any SQLAlchemy failure is
re-raised as ``StoreError`` carrying the driver message for the server log.
A unique-email violation on flush becomes ``DuplicateUserError``, so two
registrations racing past the existence check still end with one record.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import DuplicateUserError, StoreError
from database.models import Profile, User


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError):
        return None


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self._session.execute(
                select(User).where(User.email == email.lower())
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"find_by_email failed: {exc}") from exc

    async def find_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        uid = _to_uuid(user_id)
        if uid is None:
            return None
        try:
            return await self._session.get(User, uid)
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"find_by_id failed: {exc}") from exc

    async def save(self, user: User) -> User:
        """Insert or update ``user`` and flush so ``user.id`` is assigned."""
        if user.id is None:
            user.id = uuid.uuid4()
        user.email = user.email.lower()
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateUserError(detail=f"unique constraint on email: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"save failed: {exc}") from exc
        return user


class ProfileStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_user(self, user_id: str | uuid.UUID) -> Optional[Profile]:
        uid = _to_uuid(user_id)
        if uid is None:
            return None
        try:
            result = await self._session.execute(
                select(Profile).where(Profile.user_id == uid)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"find profile failed: {exc}") from exc

    async def upsert(self, user_id: str | uuid.UUID, fields: Dict[str, Any]) -> Profile:
        """Create the user's profile or overwrite the given fields on it."""
        profile = await self.find_by_user(user_id)
        if profile is None:
            profile = Profile(id=uuid.uuid4(), user_id=_to_uuid(user_id))
            self._session.add(profile)
        for key, value in fields.items():
            setattr(profile, key, value)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"save profile failed: {exc}") from exc
        return profile
