"""
Error kinds raised by the auth and profile services.

Each kind carries the HTTP status and the client-facing messages; the
boundary layer in ``api.middleware`` turns them into responses.  Messages
never reveal whether an account exists.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import status


class AuthError(Exception):
    """Base class: ``status_code`` plus one or more ``{"msg": ...}`` entries."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None) -> None:
        self.message = message or self.message
        # server-side only; never sent to the client
        self.detail = detail
        super().__init__(detail or self.message)

    def to_errors(self) -> List[Dict[str, Any]]:
        return [{"msg": self.message}]


class ValidationError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"

    def __init__(self, errors: List[Dict[str, Any]]) -> None:
        self.errors = errors
        super().__init__(detail="; ".join(e["msg"] for e in errors))

    def to_errors(self) -> List[Dict[str, Any]]:
        return list(self.errors)


class DuplicateUserError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCredentialsError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid credentials"


class UnauthorizedError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized"


class ProfileNotFoundError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "There is no profile for this user"


class StoreError(AuthError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


class TokenSigningError(AuthError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"
