"""
Pydantic Schemas Package

Request/response validation, kept separate from the SQLAlchemy models so the
API never exposes storage-only fields such as the password hash.

Schema Naming Convention:
- XxxCreate: Fields required when creating a record
- XxxUpdate: Fields allowed when updating
- XxxResponse: Fields returned in API responses
"""

from bookstore.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)
from bookstore.schemas.common import ErrorResponse, MessageResponse
from bookstore.schemas.user import (
    LoginRequest,
    PasswordUpdate,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    # User schemas
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "PasswordUpdate",
    # Auth schemas
    "LoginRequest",
    "TokenResponse",
    # Envelopes
    "MessageResponse",
    "ErrorResponse",
]
