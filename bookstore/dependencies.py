"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

Everything a request needs is built per request from the collaborators the
application factory put on ``app.state``:
- a Session (database.get_db)
- repositories bound to that Session
- services wired with repositories, the password hasher and token provider
- the bearer-token gate for the protected route group
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookstore.database import get_db
from bookstore.exceptions import AuthError
from bookstore.repositories import SQLBookRepository, SQLUserRepository
from bookstore.services import BookService, PasswordHasher, TokenProvider, UserService

logger = logging.getLogger(__name__)

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Application Collaborators
# =============================================================================
def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_provider(request: Request) -> TokenProvider:
    return request.app.state.token_provider


Hasher = Annotated[PasswordHasher, Depends(get_password_hasher)]
Tokens = Annotated[TokenProvider, Depends(get_token_provider)]


# =============================================================================
# Services
# =============================================================================
def get_user_service(db: DbSession, hasher: Hasher, tokens: Tokens) -> UserService:
    """User service bound to this request's session."""
    return UserService(SQLUserRepository(db), hasher, tokens)


def get_book_service(db: DbSession) -> BookService:
    """Book service bound to this request's session."""
    return BookService(SQLBookRepository(db))


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
# HTTPBearer extracts the token from "Authorization: Bearer <token>" and adds
# the "Authorize" button to Swagger UI. auto_error=False so missing and
# malformed headers are reported through our own error format.
bearer_scheme = HTTPBearer(auto_error=False)


class BearerAuth:
    """
    Gate for the protected route group.

    Attach once to a router with ``dependencies=[Depends(require_bearer_token)]``.
    On success the token subject (the user id, as a string) is stored on
    ``request.state.user_id``; otherwise the request is rejected with 401
    before the route handler runs.

    Rejected when:
    - the Authorization header is absent
    - the header is not a Bearer credential
    - the token provider reports the token invalid or expired
    """

    def __call__(
        self,
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    ) -> str:
        if credentials is None:
            if "authorization" not in request.headers:
                raise AuthError("missing token")
            raise AuthError("malformed authorization header")

        tokens: TokenProvider = request.app.state.token_provider
        user_id = tokens.validate(credentials.credentials)

        request.state.user_id = user_id
        return user_id


require_bearer_token = BearerAuth()


def get_current_user_id(request: Request) -> str:
    """
    Subject placed on the request by the bearer gate.

    Only meaningful on routes behind ``require_bearer_token``.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise AuthError("missing token")
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
