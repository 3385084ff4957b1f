"""
Domain Errors

Services raise these; the application's exception handlers turn them into
JSON error responses. Each error knows its HTTP status so routers never
translate errors themselves.

Taxonomy:
- ValidationError     → 400 (malformed input, failed field constraints)
- AuthError           → 401 (missing/invalid/expired token, bad credentials)
- NotFoundError       → 404 (entity absent)
- AlreadyExistsError  → 409 (duplicate email on register)
- InternalError       → 500 (hashing or provider failure)
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "validation error"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class InvalidTokenError(AuthError):
    default_message = "invalid token"


class InvalidCredentialsError(AuthError):
    default_message = "invalid email or password"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class AlreadyExistsError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "already exists"


class InternalError(AppError):
    pass
