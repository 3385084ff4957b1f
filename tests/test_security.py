"""
Tests for Password Hashing and JWT Tokens

Covers:
- bcrypt hashing and verification
- Token issue/validate round trip
- Expired, tampered, foreign-key and subject-less tokens
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from bookstore.exceptions import InvalidTokenError
from bookstore.services import JWTTokenProvider, PasswordHasher

from tests.conftest import TEST_SECRET


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_hash_is_not_plaintext(self, hasher: PasswordHasher):
        digest = hasher.hash("password123")

        assert digest != "password123"
        assert digest.startswith("$2")

    def test_hash_is_salted(self, hasher: PasswordHasher):
        """Same password hashed twice gives different digests."""
        assert hasher.hash("password123") != hasher.hash("password123")

    def test_verify_correct_password(self, hasher: PasswordHasher):
        digest = hasher.hash("password123")
        assert hasher.verify(digest, "password123") is True

    def test_verify_wrong_password(self, hasher: PasswordHasher):
        digest = hasher.hash("password123")
        assert hasher.verify(digest, "password124") is False

    def test_verify_against_garbage_digest(self, hasher: PasswordHasher):
        """A stored value that is not a bcrypt digest never matches."""
        assert hasher.verify("not-a-digest", "password123") is False

    def test_cost_factor_is_embedded(self):
        digest = PasswordHasher(rounds=5).hash("password123")
        assert "$05$" in digest


class TestJWTTokenProvider:
    """Tests for JWTTokenProvider."""

    def test_issue_and_validate(self, token_provider: JWTTokenProvider):
        token = token_provider.issue("42")

        assert token.count(".") == 2
        assert token_provider.validate(token) == "42"

    def test_payload_contains_sub_and_exp(self, token_provider: JWTTokenProvider):
        token = token_provider.issue("7")
        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])

        assert payload["sub"] == "7"
        expires = datetime.fromtimestamp(payload["exp"], tz=UTC)
        remaining = expires - datetime.now(UTC)
        assert timedelta(minutes=14) < remaining <= timedelta(minutes=15)

    def test_expired_token_rejected(self):
        provider = JWTTokenProvider(TEST_SECRET, timedelta(seconds=-10))
        token = provider.issue("1")

        with pytest.raises(InvalidTokenError):
            provider.validate(token)

    def test_token_signed_with_other_secret_rejected(self, token_provider: JWTTokenProvider):
        other = JWTTokenProvider("another-signing-key-that-is-long-enough-1234")
        token = other.issue("1")

        with pytest.raises(InvalidTokenError):
            token_provider.validate(token)

    def test_tampered_token_rejected(self, token_provider: JWTTokenProvider):
        header, payload, signature = token_provider.issue("1").split(".")
        flipped = "A" if signature[0] != "A" else "B"
        tampered = ".".join([header, payload, flipped + signature[1:]])

        with pytest.raises(InvalidTokenError):
            token_provider.validate(tampered)

    def test_garbage_token_rejected(self, token_provider: JWTTokenProvider):
        with pytest.raises(InvalidTokenError):
            token_provider.validate("not-a-jwt")

    def test_token_without_subject_rejected(self, token_provider: JWTTokenProvider):
        exp = datetime.now(UTC) + timedelta(minutes=5)
        token = jwt.encode({"exp": exp}, TEST_SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            token_provider.validate(token)

    def test_token_without_expiry_rejected(self, token_provider: JWTTokenProvider):
        token = jwt.encode({"sub": "1"}, TEST_SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            token_provider.validate(token)

    def test_invalid_token_message(self, token_provider: JWTTokenProvider):
        with pytest.raises(InvalidTokenError) as exc_info:
            token_provider.validate("not-a-jwt")

        assert exc_info.value.message == "invalid token"
        assert exc_info.value.status_code == 401
