"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. JWT token generation and validation (python-jose, HS256)
3. Constant-time password verification

Tokens are stateless: there is no revocation list, so the configured expiry
is the only bound on how long a leaked token stays usable.

Usage:
    from bookstore.services.security import JWTTokenProvider, PasswordHasher

    hasher = PasswordHasher()
    digest = hasher.hash("password123")
    hasher.verify(digest, "password123")  # True

    tokens = JWTTokenProvider(secret, timedelta(minutes=15))
    token = tokens.issue("42")
    tokens.validate(token)  # "42"
"""

import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from bookstore.exceptions import InternalError, InvalidTokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 15


# -------------------------------------------------------------------------
# Password Hashing
# -------------------------------------------------------------------------
class PasswordHasher:
    """
    One-way, salted, adaptive password hashing with bcrypt.

    Args:
        rounds: bcrypt cost factor (4-31); each step doubles the work
    """

    def __init__(self, rounds: int = 12):
        # deprecated="auto": hashes with an outdated cost still verify
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """
        Hash a plain text password.

        Returns:
            Self-contained bcrypt digest ("$2b$<cost>$<salt><hash>")

        Raises:
            InternalError: If the hashing backend fails
        """
        try:
            return self._context.hash(password)
        except (TypeError, ValueError) as e:
            logger.error(f"Password hashing failed: {e}")
            raise InternalError("failed to hash password") from e

    def verify(self, hashed_password: str, password: str) -> bool:
        """
        Compare a candidate password against a stored digest.

        Uses constant-time comparison to prevent timing attacks.

        Returns:
            True if the password matches, False otherwise (including when
            the stored value is not a recognizable digest)
        """
        try:
            return self._context.verify(password, hashed_password)
        except (UnknownHashError, ValueError, TypeError) as e:
            logger.warning(f"Password verification failed on stored digest: {e}")
            return False


# -------------------------------------------------------------------------
# Token Provider
# -------------------------------------------------------------------------
class TokenProvider(ABC):
    """Issues and validates bearer tokens that carry a subject (user id)."""

    @abstractmethod
    def issue(self, subject: str) -> str:
        """Create a token asserting ``subject``."""

    @abstractmethod
    def validate(self, token: str) -> str:
        """
        Return the subject a token asserts.

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """


class JWTTokenProvider(TokenProvider):
    """
    HS256-signed JWTs with a fixed lifetime.

    Payload: {"sub": <subject>, "exp": <issued-at + expires_in>}

    Args:
        secret: Symmetric signing key known only to this service
        expires_in: Lifetime of every issued token
        algorithm: JWT signing algorithm
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
        algorithm: str = ALGORITHM,
    ):
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def issue(self, subject: str) -> str:
        """
        Create a signed access token.

        Example:
            >>> token = provider.issue("1")
            >>> token.count(".") == 2  # JWT format: header.payload.signature
            True
        """
        expire = datetime.now(UTC) + self.expires_in
        return jwt.encode(
            {"sub": subject, "exp": expire},
            self.secret,
            algorithm=self.algorithm,
        )

    def validate(self, token: str) -> str:
        """Decode the token, check signature and expiry, return ``sub``."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
        except JWTError as e:
            logger.warning(f"JWT decode error: {e}")
            raise InvalidTokenError() from e

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.warning("JWT without a usable subject")
            raise InvalidTokenError()

        return subject
