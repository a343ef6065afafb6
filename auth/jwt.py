"""
JWT (HS256) creation and verification.

Tokens are ``header.payload.signature``: base64url without padding,
HMAC-SHA256 over the first two segments.  The payload carries
``{"user": {"id": ...}, "iat": ..., "exp": ...}``; signature and expiry are
both checked on every verification, so no server-side session is kept.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict

from auth.errors import TokenSigningError

logger = logging.getLogger(__name__)

_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(ValueError):
    """Token is malformed, badly signed or expired."""


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    s = data.encode("ascii")
    padding = b"=" * (-len(s) % 4)
    return base64.urlsafe_b64decode(s + padding)


def _sign(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def now_ts() -> int:
    """Return current UNIX timestamp (seconds)."""
    return int(time.time())


def encode(payload: Dict[str, Any], secret: str) -> str:
    """
    Encode a JWT with HS256.

    ``payload`` must contain an integer ``exp``.  Raises ``TokenSigningError``
    when the secret is missing or the payload cannot be serialized, never
    returning an unsigned token.
    """
    if not secret:
        raise TokenSigningError(detail="JWT secret is not configured")
    if not isinstance(payload.get("exp"), int):
        raise TokenSigningError(detail="JWT payload needs an integer 'exp'")
    try:
        header_b64 = _b64url_encode(json.dumps(_HEADER, separators=(",", ":")).encode("utf-8"))
        payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    except (TypeError, ValueError) as exc:
        raise TokenSigningError(detail=f"JWT encode failed: {exc}") from exc
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    return f"{header_b64}.{payload_b64}.{_b64url_encode(_sign(signing_input, secret))}"


def decode(token: str, secret: str) -> Dict[str, Any]:
    """
    Verify signature and expiry, returning the claims.

    Raises ``TokenError`` on any failure.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise TokenError("invalid token format")
    header_b64, payload_b64, sig_b64 = parts

    try:
        header = json.loads(_b64url_decode(header_b64))
        actual_sig = _b64url_decode(sig_b64)
        signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    except (ValueError, UnicodeError) as exc:
        raise TokenError(f"undecodable token: {exc}") from exc
    if not isinstance(header, dict) or header.get("alg") != "HS256":
        raise TokenError("unsupported token header")

    expected_sig = _sign(signing_input, secret)
    if not hmac.compare_digest(expected_sig, actual_sig):
        raise TokenError("bad signature")

    try:
        payload = json.loads(_b64url_decode(payload_b64))
    except (ValueError, UnicodeError) as exc:
        raise TokenError(f"undecodable payload: {exc}") from exc
    if not isinstance(payload, dict):
        raise TokenError("payload is not an object")

    exp = payload.get("exp")
    if not isinstance(exp, int):
        raise TokenError("missing 'exp'")
    if now_ts() >= exp:
        raise TokenError("token expired")
    return payload


def issue_token(user_id: str, secret: str, ttl_seconds: int) -> str:
    """Create a signed token for ``user_id`` valid for ``ttl_seconds``."""
    iat = now_ts()
    payload = {"user": {"id": str(user_id)}, "iat": iat, "exp": iat + int(ttl_seconds)}
    return encode(payload, secret)


def verify_token(token: str, secret: str) -> str:
    """Verify ``token`` and return the ``user.id`` it asserts."""
    payload = decode(token, secret)
    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise TokenError("payload has no user id")
    return str(user["id"])
