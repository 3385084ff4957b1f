"""
Users Router

Two routers:
- public_router: registration and login, no token required
- router: user management, mounted under the protected group

Endpoints:
- POST   /register                 - Create an account
- POST   /login                    - Exchange credentials for a bearer token
- GET    /user/{id}                - Get a user by id
- GET    /user/email/{email}       - Get a user by email
- GET    /users                    - List all users
- PUT    /user/{id}                - Update first/last name
- DELETE /user/{id}                - Delete a user
- PUT    /user/{id}/password       - Replace a user's password

Security:
=========
- Passwords are hashed with bcrypt before storage
- Responses never include the password hash
"""

import logging

from fastapi import APIRouter, status

from bookstore.dependencies import CurrentUserId, UserServiceDep
from bookstore.schemas import (
    LoginRequest,
    MessageResponse,
    PasswordUpdate,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)

public_router = APIRouter(
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        409: {"description": "Conflict (email already registered)"},
    },
)

router = APIRouter(
    tags=["Users"],
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "User not found"},
    },
)


# -------------------------------------------------------------------------
# Registration / Login
# -------------------------------------------------------------------------
@public_router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new user account.

    **Requirements:**
    - Valid email address, not already registered
    - Password of at least 8 characters
    - Username, first name and last name of 1-20 characters
    """,
)
def register(user_data: UserCreate, service: UserServiceDep) -> MessageResponse:
    service.register(user_data)
    return MessageResponse(message="user registered")


@public_router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a JWT.

    Include the token in the Authorization header of protected requests:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
def login(credentials: LoginRequest, service: UserServiceDep) -> TokenResponse:
    return TokenResponse(token=service.login(credentials))


# -------------------------------------------------------------------------
# User Management (protected)
# -------------------------------------------------------------------------
@router.get(
    "/user/email/{email}",
    response_model=UserResponse,
    summary="Get a user by email",
)
def get_user_by_email(email: str, service: UserServiceDep) -> UserResponse:
    return UserResponse.model_validate(service.get_user_by_email(email))


@router.get(
    "/user/{user_id}",
    response_model=UserResponse,
    summary="Get a user by ID",
)
def get_user(user_id: int, service: UserServiceDep) -> UserResponse:
    return UserResponse.model_validate(service.get_user_by_id(user_id))


@router.get(
    "/users",
    response_model=list[UserResponse],
    summary="List all users",
)
def list_users(service: UserServiceDep) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in service.get_all_users()]


@router.put(
    "/user/{user_id}",
    response_model=MessageResponse,
    summary="Update a user's name",
    description="Only first_name and last_name can be changed here.",
)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    service: UserServiceDep,
    current_user_id: CurrentUserId,
) -> MessageResponse:
    service.update_user(user_id, user_data)
    logger.info(f"User {user_id} updated by user {current_user_id}")
    return MessageResponse(message="user updated")


@router.delete(
    "/user/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
)
def delete_user(
    user_id: int,
    service: UserServiceDep,
    current_user_id: CurrentUserId,
) -> MessageResponse:
    service.delete_user(user_id)
    logger.info(f"User {user_id} deleted by user {current_user_id}")
    return MessageResponse(message="user deleted")


@router.put(
    "/user/{user_id}/password",
    response_model=MessageResponse,
    summary="Change a user's password",
    description="Replaces the password. The current password is not required.",
)
def update_password(
    user_id: int,
    password_data: PasswordUpdate,
    service: UserServiceDep,
    current_user_id: CurrentUserId,
) -> MessageResponse:
    service.update_password(user_id, password_data)
    logger.info(f"Password of user {user_id} changed by user {current_user_id}")
    return MessageResponse(message="password updated")
