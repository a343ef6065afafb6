"""
Tests for bcrypt password hashing.
"""

import pytest

from auth.password import hash_password, hash_password_async, verify_password, verify_password_async


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret1", rounds=4)
        assert hashed != "secret1"
        assert hashed.startswith("$2")

    def test_salt_differs_per_call(self):
        assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)

    def test_work_factor_embedded(self):
        assert hash_password("secret1", rounds=5).split("$")[2] == "05"

    def test_verify_roundtrip(self):
        hashed = hash_password("secret1", rounds=4)
        assert verify_password("secret1", hashed)
        assert not verify_password("wrongpass", hashed)

    def test_verify_garbage_hash_is_false(self):
        assert not verify_password("secret1", "not-a-bcrypt-hash")
        assert not verify_password("secret1", "")

    @pytest.mark.asyncio
    async def test_async_variants(self):
        hashed = await hash_password_async("secret1", rounds=4)
        assert await verify_password_async("secret1", hashed)
        assert not await verify_password_async("secret2", hashed)
