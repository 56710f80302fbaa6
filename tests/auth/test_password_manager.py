"""Tests for Argon2 password hashing."""

from unittest.mock import MagicMock, patch

import pytest
from passlib.hash import pbkdf2_sha256

from blogging_api.managers.password_manager import (
    PasswordHasher,
    hash_password,
    verify_and_update_password,
    verify_password,
)


@pytest.fixture(scope="module")
def hasher() -> PasswordHasher:
    return PasswordHasher(level="low")


class TestPasswordHasher:
    def test_hash_is_argon2_and_not_plaintext(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password123")

        assert hashed.startswith("$argon2id$")
        assert "password123" not in hashed

    def test_hashes_are_salted(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("password123") != hasher.hash("password123")

    def test_empty_password_rejected(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="Password cannot be empty"):
            hasher.hash("")

    def test_oversized_password_is_an_input_error(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="Invalid password format"):
            hasher.hash("x" * 5000)

    def test_verify(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password123")

        assert hasher.verify("password123", hashed)
        assert not hasher.verify("wrong-password", hashed)

    @pytest.mark.parametrize("bad_hash", ["", "   ", "not-a-hash"])
    def test_corrupt_hash_never_matches(self, hasher: PasswordHasher, bad_hash: str) -> None:
        assert not hasher.verify("password123", bad_hash)

    def test_missing_hash_runs_dummy_verify(self, hasher: PasswordHasher) -> None:
        assert hasher.verify_and_update("password123", None) == (False, None)

    def test_current_hash_needs_no_update(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password123")

        assert hasher.verify_and_update("password123", hashed) == (True, None)

    def test_deprecated_scheme_is_rehashed(self, hasher: PasswordHasher) -> None:
        legacy = pbkdf2_sha256.hash("password123")

        is_valid, new_hash = hasher.verify_and_update("password123", legacy)

        assert is_valid
        assert new_hash is not None
        assert new_hash.startswith("$argon2id$")

    def test_wrong_password_on_legacy_hash_is_not_rehashed(self, hasher: PasswordHasher) -> None:
        legacy = pbkdf2_sha256.hash("password123")

        assert hasher.verify_and_update("nope", legacy) == (False, None)


class TestAsyncHelpers:
    @pytest.mark.asyncio
    async def test_hash_then_verify(self) -> None:
        hashed = await hash_password("password123")

        assert await verify_password("password123", hashed)
        assert not await verify_password("password124", hashed)

    @pytest.mark.asyncio
    async def test_verify_and_update(self) -> None:
        hashed = await hash_password("password123")

        assert await verify_and_update_password("password123", hashed) == (True, None)

    @pytest.mark.asyncio
    async def test_input_errors_are_not_retried(self) -> None:
        stub = MagicMock()
        stub.hash.side_effect = ValueError("Invalid password format")

        with (
            patch("blogging_api.managers.password_manager.get_password_hasher", return_value=stub),
            pytest.raises(ValueError, match="Invalid password format"),
        ):
            await hash_password("x" * 5000)

        assert stub.hash.call_count == 1
