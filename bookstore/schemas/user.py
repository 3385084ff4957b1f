"""
User Pydantic Schemas

Schemas:
- UserCreate: Registration data
- UserUpdate: First/last name update
- PasswordUpdate: New password
- UserResponse: Public user data (never exposes the password hash)
- LoginRequest: Credentials for /login
- TokenResponse: Issued bearer token

Pydantic v2 Features Used:
- model_config: Configure model behavior
- Field(): Define constraints and metadata
- EmailStr: Built-in email validation
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from bookstore.exceptions import ValidationError

PASSWORD_MIN_LENGTH = 8
NAME_MAX_LENGTH = 20

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """
    Normalize an address the same way EmailStr does on registration.

    Lookups by email must use this form, or addresses with an upper-case
    domain never match the stored row.

    Raises:
        ValidationError: If the value is not a valid email address
    """
    try:
        return _email_adapter.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError("invalid email address") from e


def _strip_required(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty or whitespace")
    return v.strip()


def _reject_nul(v: str) -> str:
    # bcrypt cannot hash passwords containing NUL
    if "\x00" in v:
        raise ValueError("must not contain NUL characters")
    return v


class UserNames(BaseModel):
    """First and last name, shared by registration and profile update."""

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Given name",
        examples=["John"],
    )

    last_name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Family name",
        examples=["Doe"],
    )

    @field_validator("first_name", "last_name")
    @classmethod
    def names_must_not_be_blank(cls, v: str) -> str:
        return _strip_required(v)


class UserCreate(UserNames):
    """
    Schema for user registration.

    Role and account status are not accepted from the client; the service
    assigns them.
    """

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["john@example.com"],
    )

    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=72,  # bcrypt only uses the first 72 bytes
        description="Password (min 8 chars)",
        examples=["password123"],
    )

    username: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Display username",
        examples=["johndoe"],
    )

    @field_validator("username")
    @classmethod
    def username_must_not_be_blank(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("password")
    @classmethod
    def password_must_be_hashable(cls, v: str) -> str:
        return _reject_nul(v)


class UserUpdate(UserNames):
    """
    Schema for updating a user's profile.

    Only first and last name can change through this path; email, password
    and role are immutable here.
    """


class PasswordUpdate(BaseModel):
    """Schema for password replacement."""

    new_password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=72,
        description="New password (min 8 chars)",
    )

    @field_validator("new_password")
    @classmethod
    def password_must_be_hashable(cls, v: str) -> str:
        return _reject_nul(v)


class UserResponse(BaseModel):
    """
    Schema for user responses.

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique user identifier", examples=[1, 42])
    email: str = Field(..., description="User's email address")
    username: str = Field(..., description="Display username")
    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    role: str = Field(..., description="Authorization role")
    is_active: bool = Field(..., description="Whether the account is active")
    created_at: datetime | None = Field(default=None, description="When the user registered")
    updated_at: datetime | None = Field(default=None, description="When the user was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "email": "john@example.com",
                "username": "johndoe",
                "first_name": "John",
                "last_name": "Doe",
                "role": "user",
                "is_active": True,
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


# =============================================================================
# Authentication Schemas
# =============================================================================
class LoginRequest(BaseModel):
    """Credential pair used only during login; never persisted."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Plaintext password")


class TokenResponse(BaseModel):
    """Bearer token returned by /login."""

    token: str = Field(..., description="Signed JWT; send as 'Authorization: Bearer <token>'")
