"""
Tests for HS256 token issuance and verification.
"""

import base64
import json

import pytest

from auth import jwt as jwt_lib
from auth.errors import TokenSigningError
from auth.jwt import TokenError, decode, encode, issue_token, verify_token

SECRET = "test-secret"


def _b64(obj) -> str:
    return base64.urlsafe_b64encode(json.dumps(obj).encode()).rstrip(b"=").decode()


class TestIssueAndVerify:
    def test_roundtrip_returns_user_id(self):
        token = issue_token("user-123", SECRET, 86400)
        assert verify_token(token, SECRET) == "user-123"

    def test_claims_shape(self):
        token = issue_token("user-123", SECRET, 86400)
        claims = decode(token, SECRET)
        assert claims["user"] == {"id": "user-123"}
        assert claims["exp"] - claims["iat"] == 86400

    def test_three_segments(self):
        assert issue_token("u", SECRET, 60).count(".") == 2

    def test_expired_after_ttl(self, monkeypatch):
        token = issue_token("user-123", SECRET, 86400)
        real_now = jwt_lib.now_ts()
        monkeypatch.setattr(jwt_lib, "now_ts", lambda: real_now + 86400)
        with pytest.raises(TokenError, match="expired"):
            verify_token(token, SECRET)

    def test_valid_just_before_expiry(self, monkeypatch):
        real_now = jwt_lib.now_ts()
        monkeypatch.setattr(jwt_lib, "now_ts", lambda: real_now)
        token = issue_token("user-123", SECRET, 86400)
        monkeypatch.setattr(jwt_lib, "now_ts", lambda: real_now + 86399)
        assert verify_token(token, SECRET) == "user-123"


class TestRejection:
    def test_wrong_secret(self):
        token = issue_token("user-123", SECRET, 60)
        with pytest.raises(TokenError, match="signature"):
            verify_token(token, "other-secret")

    def test_tampered_payload(self):
        token = issue_token("user-123", SECRET, 60)
        header, _, sig = token.split(".")
        forged = _b64({"user": {"id": "admin"}, "iat": 0, "exp": 2**31})
        with pytest.raises(TokenError):
            verify_token(f"{header}.{forged}.{sig}", SECRET)

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!!.???.***", "é.é.é"])
    def test_malformed(self, token):
        with pytest.raises(TokenError):
            verify_token(token, SECRET)

    def test_alg_none_rejected(self):
        token = f"{_b64({'alg': 'none', 'typ': 'JWT'})}.{_b64({'user': {'id': 'x'}, 'exp': 2**31})}."
        with pytest.raises(TokenError):
            verify_token(token, SECRET)

    def test_missing_user_id(self):
        token = encode({"exp": jwt_lib.now_ts() + 60}, SECRET)
        with pytest.raises(TokenError, match="user id"):
            verify_token(token, SECRET)


class TestSigningFailures:
    def test_empty_secret_is_fatal(self):
        with pytest.raises(TokenSigningError):
            issue_token("user-123", "", 60)

    def test_missing_exp_is_fatal(self):
        with pytest.raises(TokenSigningError):
            encode({"user": {"id": "x"}}, SECRET)

    def test_signing_error_maps_to_500(self):
        assert TokenSigningError().status_code == 500
