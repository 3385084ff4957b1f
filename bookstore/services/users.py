"""
User Service

Business rules for registration, login and profile management.

Rules:
- Email is unique: register fails with AlreadyExistsError on a duplicate
- Passwords are hashed before they reach the repository; no other layer
  ever sees the plaintext
- Role is always "user" on registration, whatever the client sends
- Update, password change and delete check the user exists before any
  mutation is attempted
- Password change does not re-verify the current password
"""

import logging

from bookstore.exceptions import AlreadyExistsError, InvalidCredentialsError, NotFoundError
from bookstore.models import DEFAULT_ROLE, User
from bookstore.repositories.base import UserRepository
from bookstore.schemas.user import (
    LoginRequest,
    PasswordUpdate,
    UserCreate,
    UserUpdate,
    normalize_email,
)
from bookstore.services.security import PasswordHasher, TokenProvider

logger = logging.getLogger(__name__)


class UserService:
    """
    Orchestrates validation, persistence, hashing and token issuance.

    Args:
        repo: User storage
        hasher: Password hasher
        tokens: Token provider used by login
    """

    def __init__(self, repo: UserRepository, hasher: PasswordHasher, tokens: TokenProvider):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    def register(self, data: UserCreate) -> User:
        """
        Register a new user.

        1. Field constraints are enforced by UserCreate
        2. Reject a duplicate email
        3. Hash the password and force the default role
        4. Persist

        Raises:
            AlreadyExistsError: If the email is already registered
        """
        if self.repo.get_by_email(data.email) is not None:
            raise AlreadyExistsError("user already exists")

        user = User(
            email=data.email,
            hashed_password=self.hasher.hash(data.password),
            username=data.username,
            first_name=data.first_name,
            last_name=data.last_name,
            role=DEFAULT_ROLE,
            is_active=True,
        )
        user = self.repo.create(user)

        logger.info(f"New user registered: {user.email}")
        return user

    def login(self, credentials: LoginRequest) -> str:
        """
        Verify credentials and issue a bearer token for the user's id.

        Raises:
            NotFoundError: If no user has this email
            InvalidCredentialsError: If the password does not match
        """
        user = self.repo.get_by_email(credentials.email)
        if user is None:
            logger.warning(f"Login failed: user not found for {credentials.email}")
            raise NotFoundError("user not found")

        if not self.hasher.verify(user.hashed_password, credentials.password):
            logger.warning(f"Login failed: incorrect password for {credentials.email}")
            raise InvalidCredentialsError()

        token = self.tokens.issue(str(user.id))
        logger.info(f"User logged in: {user.email}")
        return token

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def get_user_by_id(self, user_id: int) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")
        return user

    def get_user_by_email(self, email: str) -> User:
        user = self.repo.get_by_email(normalize_email(email))
        if user is None:
            raise NotFoundError("user not found")
        return user

    def get_all_users(self) -> list[User]:
        return self.repo.list_all()

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def update_user(self, user_id: int, data: UserUpdate) -> User:
        """Change first and last name; nothing else is writable here."""
        self.get_user_by_id(user_id)

        user = self.repo.update_names(
            user_id,
            first_name=data.first_name,
            last_name=data.last_name,
        )
        if user is None:
            raise NotFoundError("user not found")
        return user

    def update_password(self, user_id: int, data: PasswordUpdate) -> None:
        """
        Replace the stored password digest.

        The caller's current password is not checked; any authenticated
        caller can reset any user's password through this path.
        """
        self.get_user_by_id(user_id)

        hashed_password = self.hasher.hash(data.new_password)
        if self.repo.update_password(user_id, hashed_password) is None:
            raise NotFoundError("user not found")

        logger.info(f"Password changed for user {user_id}")

    def delete_user(self, user_id: int) -> None:
        self.get_user_by_id(user_id)

        if not self.repo.delete(user_id):
            raise NotFoundError("user not found")

        logger.info(f"User deleted: {user_id}")
