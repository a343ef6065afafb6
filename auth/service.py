"""
Auth service — registration, login and token verification.

Holds no state of its own: every call is a function of the request, the
``UserStore`` and the frozen ``AuthSettings`` passed in at construction.
Failures are raised as the error kinds in ``auth.errors``.
"""

from __future__ import annotations

import logging

from auth.errors import DuplicateUserError, InvalidCredentialsError, UnauthorizedError
from auth.jwt import TokenError, issue_token, verify_token
from auth.password import dummy_hash, hash_password_async, verify_password_async
from auth.schemas import LoginRequest, RegisterRequest
from config.settings import AuthSettings
from database.models import User
from database.store import UserStore
from utils.avatar import gravatar_url

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: UserStore, settings: AuthSettings) -> None:
        self._store = store
        self._settings = settings

    async def register(self, req: RegisterRequest) -> str:
        """Create a user and return a token for it."""
        if await self._store.find_by_email(req.email) is not None:
            raise DuplicateUserError(detail=f"email taken: {req.email}")

        user = User(
            name=req.name,
            email=req.email,
            avatar=gravatar_url(req.email),
            password_hash=await hash_password_async(req.password, self._settings.bcrypt_rounds),
        )
        user = await self._store.save(user)

        token = self.issue(str(user.id))
        logger.info("Registered user %s (%s)", user.name, user.id)
        return token

    async def login(self, req: LoginRequest) -> str:
        """Check credentials and return a token.

        Unknown email and wrong password raise the same error.
        """
        user = await self._store.find_by_email(req.email)
        if user is None:
            # unknown emails pay the same bcrypt cost as a wrong password
            await verify_password_async(req.password, dummy_hash(self._settings.bcrypt_rounds))
            raise InvalidCredentialsError(detail=f"no user for {req.email}")
        if not await verify_password_async(req.password, user.password_hash):
            raise InvalidCredentialsError(detail=f"password mismatch for {user.id}")

        token = self.issue(str(user.id))
        logger.info("Login: %s (%s)", user.name, user.id)
        return token

    def issue(self, user_id: str) -> str:
        return issue_token(user_id, self._settings.jwt_secret, self._settings.token_ttl_seconds)


def authorize(token: str | None, settings: AuthSettings) -> str:
    """Return the user id asserted by ``token`` or raise ``UnauthorizedError``."""
    if not token:
        raise UnauthorizedError(detail="no token")
    try:
        return verify_token(token, settings.jwt_secret)
    except TokenError as exc:
        raise UnauthorizedError(detail=str(exc)) from exc
